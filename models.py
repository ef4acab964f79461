from flask_sqlalchemy import SQLAlchemy

from Cadence import DAY_ORDER

db = SQLAlchemy()

class Chain(db.Model):
    __tablename__ = "chains"
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False)
    sunday = db.Column(db.Boolean, nullable=False, default=False)
    monday = db.Column(db.Boolean, nullable=False, default=False)
    tuesday = db.Column(db.Boolean, nullable=False, default=False)
    wednesday = db.Column(db.Boolean, nullable=False, default=False)
    thursday = db.Column(db.Boolean, nullable=False, default=False)
    friday = db.Column(db.Boolean, nullable=False, default=False)
    saturday = db.Column(db.Boolean, nullable=False, default=False)
    links = db.relationship("Link", backref="chain", lazy=True, order_by="Link.date",
                            cascade="all, delete-orphan")

    def set_cadence(self, cadence):
        for name in DAY_ORDER:
            setattr(self, name, getattr(cadence, name))

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "days": {name: bool(getattr(self, name)) for name in DAY_ORDER},
        }

    def __repr__(self):
        return f"<Chain {self.name}>"

class Link(db.Model):
    __tablename__ = "links"
    chain_id = db.Column(db.Integer, db.ForeignKey("chains.id", ondelete="CASCADE"), primary_key=True)
    date = db.Column(db.Date, primary_key=True)  # stored as ISO-8601 text by SQLite

    def __repr__(self):
        return f"<Link {self.chain_id} {self.date.isoformat()}>"
