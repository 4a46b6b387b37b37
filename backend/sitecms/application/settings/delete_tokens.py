from flask import current_app
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from sitecms.application.list_editor import DeleteNotConfirmed

_SALT = "settings-delete-v1"


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=_SALT)


def issue_delete_token(document_key, section_key, list_name, record_id) -> str:
    return _serializer().dumps([document_key, section_key, list_name, record_id])


def verify_delete_token(token, document_key, section_key, list_name, record_id) -> None:
    if not token:
        raise DeleteNotConfirmed(record_id, "A confirm_token is required to delete a record.")

    max_age = current_app.config.get("DELETE_CONFIRM_MAX_AGE", 300)
    try:
        payload = _serializer().loads(token, max_age=max_age)
    except SignatureExpired:
        raise DeleteNotConfirmed(record_id, "The delete confirmation has expired.")
    except BadSignature:
        raise DeleteNotConfirmed(record_id, "The delete confirmation is invalid.")

    if payload != [document_key, section_key, list_name, record_id]:
        raise DeleteNotConfirmed(record_id, "The delete confirmation was issued for another record.")
