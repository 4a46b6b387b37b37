from blinker import Namespace

_signals = Namespace()

# sender: the document key, kwargs: value=<saved snapshot>
settings_saved = _signals.signal("settings-saved")
