from flask import Blueprint

bp = Blueprint('community', __name__)

from ekheti.community import routes  # noqa: E402,F401
