# sitecms/api/v1/settings.py
from flask import current_app, request, jsonify
from flask_jwt_extended import jwt_required, get_jwt, get_jwt_identity, verify_jwt_in_request
from sitecms.application.document_editor import load_document
from sitecms.application.settings.lookup import resolve
from sitecms.application.settings.replace_document import replace_document
from sitecms.application.settings.update_section import replace_section, patch_section
from sitecms.application.settings.edit_list import (
    add_item,
    update_item,
    move_item,
    request_item_delete,
    delete_item,
)
from sitecms.normalizers.document import normalize_document
from sitecms.normalizers.section import normalize_section
from sitecms.persistence import get_bridge
from sitecms.utils.decorators import roles_required
from sitecms.utils.optimistic_lock import enforce_optimistic_lock
from . import v1_bp

ITEM_PATH = "/documents/<document_key>/sections/<section_key>/lists/<list_name>/items"


def _is_admin_view():
    if request.args.get("include_hidden") not in ("1", "true"):
        return False
    verify_jwt_in_request(optional=True)
    return get_jwt().get("role") == "admin"


def _json_object():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    return data


def _check_lock(document_key):
    enforce_optimistic_lock(get_bridge().last_modified(document_key))


# ------------------------
# Documents
# ------------------------

@v1_bp.route("/documents/<document_key>", methods=["GET"])
def get_document(document_key):
    schema, _, _ = resolve(document_key)
    bridge = get_bridge()
    document = load_document(bridge, schema)

    return jsonify(normalize_document(
        schema,
        document,
        public=not _is_admin_view(),
        last_modified=bridge.last_modified(document_key),
    ))


@v1_bp.route("/documents/<document_key>", methods=["PUT"])
@jwt_required()
@roles_required("admin")
def put_document(document_key):
    schema, _, _ = resolve(document_key)
    data = _json_object()
    if data is None or not isinstance(data.get("sections"), dict):
        return jsonify({"error": "Body must be an object with a 'sections' object"}), 400

    _check_lock(document_key)

    document = replace_document(
        document_key=document_key,
        document=data["sections"],
        actor_id=get_jwt_identity(),
    )

    return jsonify(normalize_document(
        schema,
        document,
        public=False,
        last_modified=get_bridge().last_modified(document_key),
    )), 200


# ------------------------
# Sections
# ------------------------

@v1_bp.route("/documents/<document_key>/sections/<section_key>", methods=["GET"])
def get_section(document_key, section_key):
    schema, section_schema, _ = resolve(document_key, section_key)
    document = load_document(get_bridge(), schema)

    return jsonify(normalize_section(
        section_schema,
        document.get(section_key),
        public=not _is_admin_view(),
    ))


@v1_bp.route("/documents/<document_key>/sections/<section_key>", methods=["PUT"])
@jwt_required()
@roles_required("admin")
def put_section(document_key, section_key):
    _, section_schema, _ = resolve(document_key, section_key)
    data = _json_object()
    if data is None:
        return jsonify({"error": "Body must be a JSON object"}), 400

    _check_lock(document_key)

    settings = replace_section(
        document_key=document_key,
        section_key=section_key,
        settings=data,
        actor_id=get_jwt_identity(),
    )
    return jsonify(normalize_section(section_schema, settings)), 200


@v1_bp.route("/documents/<document_key>/sections/<section_key>", methods=["PATCH"])
@jwt_required()
@roles_required("admin")
def patch_section_fields(document_key, section_key):
    _, section_schema, _ = resolve(document_key, section_key)
    data = _json_object()
    if not data:
        return jsonify({"error": "No fields provided for update"}), 400

    _check_lock(document_key)

    settings = patch_section(
        document_key=document_key,
        section_key=section_key,
        fields=data,
        actor_id=get_jwt_identity(),
    )
    return jsonify(normalize_section(section_schema, settings)), 200


# ------------------------
# Records
# ------------------------

@v1_bp.route(ITEM_PATH, methods=["POST"])
@jwt_required()
@roles_required("admin")
def create_item(document_key, section_key, list_name):
    _, section_schema, _ = resolve(document_key, section_key, list_name)
    _check_lock(document_key)

    settings, new_id = add_item(
        document_key=document_key,
        section_key=section_key,
        list_name=list_name,
        actor_id=get_jwt_identity(),
    )

    return jsonify({
        "id": new_id,
        "expanded_id": new_id,
        "section": normalize_section(section_schema, settings),
    }), 201


@v1_bp.route(ITEM_PATH + "/<record_id>", methods=["PATCH"])
@jwt_required()
@roles_required("admin")
def patch_item(document_key, section_key, list_name, record_id):
    _, section_schema, _ = resolve(document_key, section_key, list_name)
    data = _json_object()
    if data is None:
        return jsonify({"error": "Body must be a JSON object"}), 400

    _check_lock(document_key)

    settings = update_item(
        document_key=document_key,
        section_key=section_key,
        list_name=list_name,
        record_id=record_id,
        fields=data,
        actor_id=get_jwt_identity(),
    )
    return jsonify(normalize_section(section_schema, settings)), 200


@v1_bp.route(ITEM_PATH + "/<record_id>/move", methods=["POST"])
@jwt_required()
@roles_required("admin")
def move_item_route(document_key, section_key, list_name, record_id):
    _, section_schema, _ = resolve(document_key, section_key, list_name)
    data = _json_object() or {}

    _check_lock(document_key)

    settings, moved = move_item(
        document_key=document_key,
        section_key=section_key,
        list_name=list_name,
        record_id=record_id,
        direction=data.get("direction"),
        actor_id=get_jwt_identity(),
    )
    return jsonify({
        "moved": moved,
        "section": normalize_section(section_schema, settings),
    }), 200


@v1_bp.route(ITEM_PATH + "/<record_id>/delete-request", methods=["POST"])
@jwt_required()
@roles_required("admin")
def request_delete_route(document_key, section_key, list_name, record_id):
    token = request_item_delete(
        document_key=document_key,
        section_key=section_key,
        list_name=list_name,
        record_id=record_id,
    )
    return jsonify({
        "record_id": record_id,
        "confirm_token": token,
        "expires_in": current_app.config.get("DELETE_CONFIRM_MAX_AGE", 300),
    }), 200


@v1_bp.route(ITEM_PATH + "/<record_id>", methods=["DELETE"])
@jwt_required()
@roles_required("admin")
def delete_item_route(document_key, section_key, list_name, record_id):
    _, section_schema, _ = resolve(document_key, section_key, list_name)
    data = _json_object() or {}
    token = data.get("confirm_token") or request.headers.get("X-Confirm-Token")

    _check_lock(document_key)

    settings = delete_item(
        document_key=document_key,
        section_key=section_key,
        list_name=list_name,
        record_id=record_id,
        confirm_token=token,
        actor_id=get_jwt_identity(),
    )
    return jsonify(normalize_section(section_schema, settings)), 200
