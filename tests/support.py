from __future__ import annotations

import unittest

from flask_jwt_extended import create_access_token

from sitecms import create_app
from sitecms.extensions import db


class AppTestCase(unittest.TestCase):
    """Fresh app with an in-memory database and a pushed app context."""

    config_name = "testing"

    def setUp(self):
        self.app = create_app(self.config_name)
        self.ctx = self.app.app_context()
        self.ctx.push()
        db.create_all()
        self.client = self.app.test_client()
        self.addCleanup(self._tear_down_app)

    def _tear_down_app(self):
        db.session.remove()
        db.drop_all()
        self.ctx.pop()

    def auth_headers(self, role="admin", identity="admin-1"):
        token = create_access_token(identity=identity, additional_claims={"role": role})
        return {"Authorization": f"Bearer {token}"}
