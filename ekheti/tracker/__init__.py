from flask import Blueprint

bp = Blueprint('tracker', __name__)

from ekheti.tracker import routes  # noqa: E402,F401
