from flask import Blueprint, current_app, jsonify, request

from crystal_counter import config
from crystal_counter.kernel.visitor_store import StoreError, VisitorStore

bp = Blueprint("api", __name__, url_prefix="/")

def _store() -> VisitorStore:
    return current_app.extensions["visitor_store"]

def client_ip():
    header = current_app.config.get("IP_HEADER") or config.get_ip_header()
    ip = (request.headers.get(header) or "").strip()
    if ip:
        return ip
    forwarded = request.headers.get("X-Forwarded-For", "")
    first = forwarded.split(",")[0].strip()
    if first:
        return first
    return request.remote_addr

# ---------- health / version ----------
@bp.route("/health")
def health():
    return jsonify({"ok": True})

@bp.route("/version")
def version():
    return jsonify({"name": "CrystalCounter", "id": "cube-lehmer", "api": 1})

# ---------- visitors ----------
@bp.route("/api/visit", methods=["GET"])
def visit():
    store = _store()
    ip = client_ip()
    try:
        if not ip:
            return jsonify({"count": store.snapshot()["count"]})
        count, _ = store.record(ip)
    except StoreError as e:
        current_app.logger.error("visit not recorded: %s", e)
        return jsonify({"ok": False, "error": "store unavailable"}), 503
    return jsonify({"count": count})

@bp.route("/api/ips", methods=["GET"])
def ips():
    return jsonify(_store().snapshot())
