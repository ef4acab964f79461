import logging

from flask import Blueprint, request, jsonify
from sqlalchemy.exc import SQLAlchemyError

import store

logger = logging.getLogger(__name__)

links_bp = Blueprint("links", __name__, url_prefix="/api/chains/<ident>/links")


@links_bp.route("", methods=["GET", "POST"])
def links(ident):
    chain = store.get_chain(ident)
    if request.method == "GET":
        dates = store.get_links(chain.id)
        logger.debug(f"Fetched {len(dates)} links for chain {chain.name}")
        return jsonify([d.isoformat() for d in dates]), 200

    data = request.get_json(silent=True) or {}
    logger.debug(f"Add link payload for {chain.name}: {data}")
    day = store.parse_date(data.get("date", "today"))
    try:
        link, created = store.add_link(chain.id, day)
    except SQLAlchemyError:
        return jsonify({"message": "Failed to add link"}), 500
    message = "Link added" if created else "Link already exists"
    return jsonify({"message": message, "chain": chain.name, "date": link.date.isoformat()}), 201 if created else 200


@links_bp.route("/<day>", methods=["PUT", "DELETE"])
def link(ident, day):
    old_day = store.parse_date(day)
    if request.method == "PUT":
        data = request.get_json(silent=True) or {}
        logger.debug(f"Move link {ident}/{day} payload: {data}")
        if not data.get("date"):
            return jsonify({"message": "Target date required"}), 400
        new_day = store.parse_date(data["date"])
        try:
            moved = store.move_link(ident, old_day, new_day)
        except SQLAlchemyError:
            return jsonify({"message": "Failed to move link"}), 500
        return jsonify({"message": "Link moved", "date": moved.date.isoformat()}), 200

    try:
        chain = store.delete_link(ident, old_day)
    except SQLAlchemyError:
        return jsonify({"message": "Failed to delete link"}), 500
    return jsonify({"message": "Link deleted", "chain": chain.name, "date": old_day.isoformat()}), 200
