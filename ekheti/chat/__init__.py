from flask import Blueprint

bp = Blueprint('chat', __name__)

from ekheti.chat import routes  # noqa: E402,F401
