from flask import Blueprint

bp = Blueprint('advisory', __name__)

from ekheti.advisory import routes  # noqa: E402,F401
