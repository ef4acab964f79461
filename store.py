import logging
from datetime import date, datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError

from Cadence import WeekdayCadence, is_active
from errors import Conflict, InvalidDate, NotFound
from models import db, Chain, Link

logger = logging.getLogger(__name__)

DATE_FORMATS = ("%Y-%m-%d", "%Y%m%d")


def parse_date(raw, today=None):
    """Parse a user supplied date; ``today`` and ``yesterday`` are relative to ``today``."""
    if isinstance(raw, date):
        return raw
    if not isinstance(raw, str):
        raise InvalidDate(f"Invalid date: {raw!r} (expected YYYY-MM-DD)")
    text = raw.strip().lower()
    today = today or date.today()
    if text == "today":
        return today
    if text == "yesterday":
        return today - timedelta(days=1)
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    raise InvalidDate(f"Invalid date: {raw!r} (expected YYYY-MM-DD)")


def _commit(action):
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        logger.error(f"Database error {action}: {str(e)}")
        db.session.rollback()
        raise


def get_chain(identifier):
    chain = None
    if isinstance(identifier, int) or str(identifier).isdigit():
        chain = db.session.get(Chain, int(identifier))
    if chain is None:
        chain = Chain.query.filter_by(name=str(identifier)).first()
    if chain is None:
        raise NotFound(f"No chain named {identifier!r}")
    return chain


def get_chain_by_name(name):
    chain = Chain.query.filter_by(name=str(name)).first()
    if chain is None:
        raise NotFound(f"No chain named {name!r}")
    return chain


def get_chains():
    return Chain.query.order_by(Chain.name.asc()).all()


def get_links(chain_id):
    rows = Link.query.filter_by(chain_id=chain_id).order_by(Link.date.asc()).all()
    return [row.date for row in rows]


def add_chain(name, cadence):
    name = str(name or "").strip()
    if not name:
        raise ValueError("Chain name required")
    chain = Chain.query.filter_by(name=name).first()
    created = chain is None
    if created:
        chain = Chain(name=name)
        db.session.add(chain)
    chain.set_cadence(cadence)
    _commit(f"saving chain {name}")
    logger.info(f"Chain {'created' if created else 'updated'}: {name} ({', '.join(cadence.active_days()) or 'no days'})")
    return chain, created


def edit_chain(identifier, name=None, cadence=None):
    chain = get_chain(identifier)
    if name is not None:
        name = str(name).strip()
        if not name:
            raise ValueError("Chain name required")
        if name != chain.name and Chain.query.filter_by(name=name).first():
            raise Conflict(f"A chain named {name!r} already exists")
        chain.name = name
    if cadence is not None:
        chain.set_cadence(cadence)
    _commit(f"updating chain {chain.id}")
    logger.info(f"Chain {chain.id} updated: {chain.name}")
    return chain


def delete_chain(identifier):
    chain = get_chain(identifier)
    logger.info(f"Deleting chain {chain.name} with {len(chain.links)} links")
    db.session.delete(chain)
    _commit(f"deleting chain {chain.name}")
    return chain


def add_link(identifier, day):
    chain = get_chain(identifier)
    link = db.session.get(Link, (chain.id, day))
    if link is not None:
        logger.debug(f"Link for {chain.name} on {day.isoformat()} already exists")
        return link, False
    link = Link(chain_id=chain.id, date=day)
    db.session.add(link)
    _commit(f"adding link to {chain.name}")
    logger.info(f"Link added for {chain.name} on {day.isoformat()}")
    return link, True


def move_link(identifier, old_day, new_day):
    chain = get_chain(identifier)
    link = db.session.get(Link, (chain.id, old_day))
    if link is None:
        raise NotFound(f"No link for {chain.name!r} on {old_day.isoformat()}")
    if old_day == new_day:
        return link
    if db.session.get(Link, (chain.id, new_day)) is not None:
        raise Conflict(f"{chain.name!r} already has a link on {new_day.isoformat()}")
    db.session.delete(link)
    moved = Link(chain_id=chain.id, date=new_day)
    db.session.add(moved)
    _commit(f"moving link for {chain.name}")
    logger.info(f"Link for {chain.name} moved from {old_day.isoformat()} to {new_day.isoformat()}")
    return moved


def delete_link(identifier, day):
    chain = get_chain(identifier)
    link = db.session.get(Link, (chain.id, day))
    if link is None:
        raise NotFound(f"No link for {chain.name!r} on {day.isoformat()}")
    db.session.delete(link)
    _commit(f"deleting link for {chain.name}")
    logger.info(f"Link for {chain.name} on {day.isoformat()} deleted")
    return chain


def pending_chains(today):
    """Chains expected today that have no link yet."""
    pending = []
    for chain in get_chains():
        if not is_active(WeekdayCadence.from_chain(chain), today):
            continue
        if db.session.get(Link, (chain.id, today)) is None:
            pending.append(chain)
    return pending
