"""
Forms for user authentication and account management.
"""
from wtforms import StringField, PasswordField, BooleanField, SelectField
from wtforms.validators import DataRequired, Email, EqualTo, ValidationError, Length, Optional

from ekheti.forms import ApiForm, VOICE_LANGUAGES
from ekheti.models.user import User


class LoginForm(ApiForm):
    """Form for user login."""
    email = StringField('Email', validators=[DataRequired(), Email()])
    password = PasswordField('Password', validators=[DataRequired()])
    remember_me = BooleanField('Remember Me')


class SignupForm(ApiForm):
    """Form for new user registration."""
    name = StringField('Full Name', validators=[DataRequired(), Length(min=2, max=100)])
    email = StringField('Email', validators=[DataRequired(), Email(), Length(max=120)])
    password = PasswordField('Password', validators=[
        DataRequired(),
        Length(min=6, message='Password must be at least 6 characters long')
    ])
    confirm_password = PasswordField('Confirm Password', validators=[
        Optional(),
        EqualTo('password', message='Passwords must match')
    ])

    def validate_email(self, email):
        """Validate that email is unique."""
        user = User.query.filter_by(email=email.data.lower()).first()
        if user:
            raise ValidationError('This email is already registered. Please use a different email or login instead.')


class LanguageForm(ApiForm):
    language = SelectField('Language', choices=[(code, code) for code in VOICE_LANGUAGES],
                           validators=[DataRequired()])
    location = StringField('Location', validators=[Optional(), Length(max=100)])
