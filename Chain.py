import logging

from flask import Blueprint, request, jsonify
from sqlalchemy.exc import SQLAlchemyError

from Cadence import WeekdayCadence
from Streak import summarize
import store

logger = logging.getLogger(__name__)

chains_bp = Blueprint("chains", __name__, url_prefix="/api/chains")


def cadence_from_payload(days):
    """``days`` may be a list of weekday names, a comma separated string or a {day: bool} map."""
    if isinstance(days, dict):
        return WeekdayCadence.from_days(name for name, flag in days.items() if flag)
    if not isinstance(days, (str, list)):
        raise ValueError(f"days must be a list, a string or a map of weekdays, not {days!r}")
    return WeekdayCadence.from_days(days)


def chain_payload(chain):
    payload = chain.to_dict()
    payload["streak"] = summarize(chain, store.get_links(chain.id)).to_dict()
    return payload


@chains_bp.route("", methods=["GET", "POST"])
def chains():
    if request.method == "GET":
        chains = store.get_chains()
        logger.debug(f"Fetched {len(chains)} chains")
        return jsonify([chain_payload(chain) for chain in chains]), 200

    data = request.get_json(silent=True) or {}
    logger.debug(f"Create chain payload: {data}")
    name = data.get("name")
    if not name:
        logger.error("Missing chain name")
        return jsonify({"message": "Name required"}), 400
    try:
        cadence = cadence_from_payload(data.get("days", "all"))
    except ValueError as e:
        logger.error(f"Invalid cadence: {e}")
        return jsonify({"message": str(e)}), 400
    try:
        chain, created = store.add_chain(name, cadence)
    except SQLAlchemyError:
        return jsonify({"message": "Failed to save chain"}), 500
    except ValueError as e:
        return jsonify({"message": str(e)}), 400
    message = "Chain created" if created else "Chain updated"
    return jsonify({"message": message, "id": chain.id}), 201 if created else 200


@chains_bp.route("/<ident>", methods=["GET", "PUT", "DELETE"])
def chain(ident):
    if request.method == "GET":
        return jsonify(chain_payload(store.get_chain(ident))), 200

    if request.method == "PUT":
        data = request.get_json(silent=True) or {}
        logger.debug(f"Update chain {ident} payload: {data}")
        try:
            cadence = cadence_from_payload(data["days"]) if "days" in data else None
            chain = store.edit_chain(ident, name=data.get("name"), cadence=cadence)
        except SQLAlchemyError:
            return jsonify({"message": "Failed to update chain"}), 500
        except ValueError as e:
            logger.error(f"Invalid chain update: {e}")
            return jsonify({"message": str(e)}), 400
        return jsonify({"message": "Chain updated", "chain": chain.to_dict()}), 200

    try:
        chain = store.delete_chain(ident)
    except SQLAlchemyError:
        return jsonify({"message": "Failed to delete chain"}), 500
    return jsonify({"message": f"Deleted {chain.name}"}), 200
