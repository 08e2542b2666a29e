"""
Authentication routes: sign up, log in, log out and the user's preferences.
"""
from flask import jsonify, session, current_app
from flask_login import login_user, logout_user, current_user, login_required
from sqlalchemy.exc import SQLAlchemyError

from ekheti.auth import bp
from ekheti.auth.forms import LoginForm, SignupForm, LanguageForm
from ekheti.extensions import db
from ekheti.forms import form_errors
from ekheti.models.user import User


@bp.route('/signup', methods=['POST'])
def signup():
    """Handle new user registration."""
    form = SignupForm()
    if not form.validate_on_submit():
        return form_errors(form)

    user = User(email=form.email.data.lower(), display_name=form.name.data)
    user.set_password(form.password.data)
    try:
        db.session.add(user)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error('Error creating user: %s', e)
        return jsonify({'error': 'Could not create the account. Please try again.'}), 500

    login_user(user)
    current_app.logger.info('New user signed up: %s', user.email)
    return jsonify({'message': 'Account created successfully.', 'user': user.to_dict()}), 201


@bp.route('/login', methods=['POST'])
def login():
    """Handle user login."""
    form = LoginForm()
    if not form.validate_on_submit():
        return form_errors(form)

    user = User.query.filter_by(email=form.email.data.lower()).first()
    if user is None or not user.check_password(form.password.data):
        return jsonify({'error': 'Invalid email or password'}), 401

    login_user(user, remember=form.remember_me.data)
    return jsonify({'message': 'Logged in successfully.', 'user': user.to_dict()})


@bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """Handle user logout."""
    logout_user()
    session.pop('active_conversation_id', None)
    return jsonify({'message': 'Logged out.'})


@bp.route('/me')
@login_required
def me():
    return jsonify({'user': current_user.to_dict()})


@bp.route('/preferences', methods=['POST'])
@login_required
def preferences():
    """Save the interface language and, optionally, the last used location."""
    form = LanguageForm()
    if not form.validate_on_submit():
        return form_errors(form)

    current_user.language = form.language.data
    if form.location.data:
        current_user.location = form.location.data
    session['lang'] = form.language.data
    db.session.commit()
    return jsonify({'user': current_user.to_dict()})
