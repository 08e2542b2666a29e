"""
Input forms for the JSON API. Flask-WTF reads JSON bodies, form posts and
multipart uploads alike; field names are the request keys.
"""
from flask import jsonify
from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileAllowed, FileSize
from wtforms import StringField, TextAreaField, SelectField, FloatField, BooleanField, DateField
from wtforms.validators import DataRequired, Length, NumberRange, Optional, ValidationError

from config import Config
from ekheti.calculators import LAND_UNITS
from ekheti.models.community import POST_TYPES
from ekheti.models.notifications import ALERT_CONDITIONS
from ekheti.models.tracker import TRANSACTION_TYPES, CURRENCIES

VOICE_LANGUAGES = ['en', 'hi', 'gu', 'mr', 'bn', 'ta', 'te', 'kn', 'pa']


def _choices(values):
    return [(v, v.capitalize()) for v in values]


def form_errors(form):
    """400 response carrying the WTForms error dict."""
    return jsonify({'error': 'Invalid input', 'errors': form.errors}), 400


class ApiForm(FlaskForm):
    """Base for API forms. Sessions are cookie-authenticated JSON calls, no CSRF token."""
    class Meta:
        csrf = False


class AdvisoryForm(ApiForm):
    crop_type = StringField('Crop Type', validators=[DataRequired(message='Please enter or select a type.')])
    soil_details = StringField('Soil Details', validators=[DataRequired(message='Please enter or select a soil type.')])
    current_stage = StringField('Current Stage', validators=[DataRequired(message='Please enter or select a stage.')])
    location = StringField('Location', validators=[DataRequired(), Length(min=2, message='Please enter your location.')])


class DiseaseImageForm(ApiForm):
    """A photo either as an upload or as a data URI."""
    photo = FileField('Photo', validators=[
        FileAllowed(Config.ALLOWED_IMAGE_EXTENSIONS, 'Images only!'),
        FileSize(max_size=Config.MAX_IMAGE_SIZE, message='Please upload an image smaller than 4MB.'),
    ])
    photo_data_uri = StringField('Photo Data URI', validators=[Optional()])

    def validate(self, extra_validators=None):
        if not super().validate(extra_validators):
            return False
        if not self.photo.data and not self.photo_data_uri.data:
            self.photo.errors.append('Please select an image to analyze.')
            return False
        return True


class SimulationForm(ApiForm):
    land_size = FloatField('Land Size (acres)', validators=[DataRequired(), NumberRange(min=0.01)])
    crop_name = StringField('Crop', validators=[DataRequired(), Length(min=2, max=100)])
    input_costs = FloatField('Input Costs (₹)', validators=[
        NumberRange(min=0, message='Please enter input costs of 0 or more.')])
    location = StringField('Location', validators=[DataRequired(), Length(min=2, max=100)])


class MarketPriceForm(ApiForm):
    location = StringField('State', validators=[DataRequired()])
    crop = StringField('Crop', default='All', validators=[Optional()])


class CalculatorForm(ApiForm):
    item = StringField('Crop or Fruit', validators=[DataRequired()])
    land_size = FloatField('Land Size', validators=[DataRequired(), NumberRange(min=0)])
    unit = SelectField('Unit', choices=[(u, u) for u in LAND_UNITS], default='acre')
    pest = StringField('Pest or Disease', validators=[Optional()])


class CropTrackerForm(ApiForm):
    name = StringField('Crop Name', validators=[DataRequired(), Length(min=2, max=100)])


class TransactionForm(ApiForm):
    type = SelectField('Type', choices=_choices(TRANSACTION_TYPES), validators=[DataRequired()])
    amount = FloatField('Amount', validators=[DataRequired(), NumberRange(min=0, message='Amount must be positive.')])
    currency = SelectField('Currency', choices=[(c, c) for c in CURRENCIES], default='INR')
    category = StringField('Category', validators=[DataRequired(), Length(min=2, max=100)])
    date = DateField('Date', validators=[DataRequired()])
    description = TextAreaField('Description', validators=[Optional(), Length(max=500)])


class ReminderForm(ApiForm):
    task = StringField('Task', validators=[DataRequired(), Length(max=200)])
    date = DateField('Date', validators=[DataRequired()])


class PriceAlertForm(ApiForm):
    crop = StringField('Crop', validators=[DataRequired(), Length(max=100)])
    threshold = FloatField('Price Threshold', validators=[DataRequired(), NumberRange(min=0)])
    condition = SelectField('Condition', choices=_choices(ALERT_CONDITIONS), validators=[DataRequired()])


class WeatherAlertSettingsForm(ApiForm):
    rain = BooleanField('Rain')
    frost = BooleanField('Frost')
    high_wind = BooleanField('High Wind')


class PostForm(ApiForm):
    type = SelectField('Type', choices=_choices(POST_TYPES), validators=[DataRequired()])
    item_name = StringField('Crop or Fruit Name', validators=[DataRequired(), Length(min=2, max=100)])
    content = TextAreaField('Content', validators=[DataRequired(), Length(max=2000)])
    image_url = StringField('Image URL', validators=[Optional(), Length(max=2000)])


class CommentForm(ApiForm):
    comment = TextAreaField('Comment', validators=[DataRequired(), Length(max=1000)])


class ChatMessageForm(ApiForm):
    """Text plus an optional image or plain-text document."""
    text = TextAreaField('Message', validators=[Optional(), Length(max=4000)])
    management_type = SelectField('Context', choices=[('Crops', 'Crops'), ('Fruits', 'Fruits')], default='Crops')
    image = FileField('Image', validators=[
        FileAllowed(Config.ALLOWED_IMAGE_EXTENSIONS, 'Images only!'),
        FileSize(max_size=Config.MAX_IMAGE_SIZE, message='Please upload an image smaller than 4MB.'),
    ])
    image_data_uri = StringField('Image Data URI', validators=[Optional()])
    document = FileField('Document', validators=[
        FileAllowed(['txt'], 'Only .txt files are supported for document analysis.'),
        FileSize(max_size=Config.MAX_DOCUMENT_SIZE, message='Please upload a document smaller than 10MB.'),
    ])

    def validate_document(self, field):
        if field.data and field.data.mimetype != 'text/plain':
            raise ValidationError('Only .txt files are supported for document analysis.')

    def validate(self, extra_validators=None):
        if not super().validate(extra_validators):
            return False
        if not (self.text.data or '').strip() and not self.image.data \
                and not self.image_data_uri.data and not self.document.data:
            self.text.errors.append('Please type a message or attach a file.')
            return False
        return True


class VoiceForm(ApiForm):
    transcript = TextAreaField('Transcript', validators=[DataRequired(), Length(max=4000)])
    language = SelectField('Language', choices=[(code, code) for code in VOICE_LANGUAGES], default='en')


class SpeechForm(ApiForm):
    text = TextAreaField('Text', validators=[DataRequired()])
    language = SelectField('Language', choices=[(code, code) for code in VOICE_LANGUAGES], default='en')
