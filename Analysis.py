from flask import Blueprint, current_app, request, jsonify
import logging

from Streak import build_day_grid, summarize
import store

logger = logging.getLogger(__name__)

analysis_bp = Blueprint("analysis", __name__, url_prefix="/api")


def _today():
    return store.parse_date(request.args.get("today", "today"))


@analysis_bp.route("/chains/<ident>/streak", methods=["GET"])
def get_streak(ident):
    chain = store.get_chain(ident)
    summary = summarize(chain, store.get_links(chain.id))
    logger.debug(f"Streak for {chain.name}: current={summary.current} longest={summary.longest}")
    return jsonify(summary.to_dict()), 200


@analysis_bp.route("/chains/<ident>/grid", methods=["GET"])
def get_grid(ident):
    chain = store.get_chain(ident)
    today = _today()
    window = request.args.get("days", current_app.config["GRID_WINDOW_DAYS"], type=int)
    if window is None or window < 1:
        return jsonify({"message": "days must be a positive integer"}), 400
    grid = build_day_grid(store.get_links(chain.id), today, window)
    return jsonify({
        "name": chain.name,
        "today": today.isoformat(),
        "days": [marker.to_dict() for marker in grid]
    }), 200


@analysis_bp.route("/streaks", methods=["GET"])
def get_streaks():
    today = _today()
    show_all = request.args.get("all", "").lower() in ("1", "true", "yes")
    chains = store.get_chains() if show_all else store.pending_chains(today)
    streaks = [summarize(chain, store.get_links(chain.id)).to_dict() for chain in chains]
    logger.debug(f"Fetched {len(streaks)} streaks for {today.isoformat()} (all={show_all})")
    return jsonify({
        "today": today.isoformat(),
        "pending": len(streaks) if not show_all else len(store.pending_chains(today)),
        "streaks": streaks
    }), 200
