from sitecms.extensions import db
from .base import BaseModel


class SettingsDocument(BaseModel):
    __tablename__ = "settings_documents"

    key = db.Column(db.String(100), nullable=False, unique=True, index=True)
    value = db.Column(db.Text, nullable=False)  # serialized JSON snapshot
    revision = db.Column(db.Integer, nullable=False, default=1)
    updated_by = db.Column(db.String(36), nullable=True)
