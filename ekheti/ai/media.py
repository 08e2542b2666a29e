"""
Data URI helpers for images and documents sent to the model.
"""
import base64
import binascii
import io
import re

from PIL import Image, UnidentifiedImageError

from ekheti.errors import FlowError

DATA_URI_RE = re.compile(r'^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.+)$', re.DOTALL)


def parse_data_uri(uri):
    """Split 'data:<mimetype>;base64,<encoded_data>' into (mimetype, bytes)."""
    match = DATA_URI_RE.match(uri or '')
    if not match:
        raise FlowError("Expected a base64 data URI with a MIME type.", status_code=400)
    try:
        data = base64.b64decode(match.group('data'), validate=True)
    except (binascii.Error, ValueError):
        raise FlowError("The data URI payload is not valid base64.", status_code=400)
    return match.group('mime'), data


def to_data_uri(mime, data):
    return f"data:{mime};base64,{base64.b64encode(data).decode('ascii')}"


def image_data_uri(data, max_size):
    """Check that bytes are a real image within the size limit and encode them."""
    if len(data) > max_size:
        raise FlowError(f"Please upload an image smaller than {max_size // (1024 * 1024)}MB.", status_code=400)
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.verify()
            mime = Image.MIME.get(image.format, 'image/jpeg')
    except (UnidentifiedImageError, OSError):
        raise FlowError("The uploaded file is not a valid image.", status_code=400)
    return to_data_uri(mime, data)


def checked_image_uri(uri, max_size):
    """Validate an image that arrived as a data URI."""
    mime, data = parse_data_uri(uri)
    if not mime.startswith('image/'):
        raise FlowError("Only image data URIs are accepted.", status_code=400)
    return image_data_uri(data, max_size)


def media_part(uri):
    """A data URI as an inline part for generate_content."""
    mime, data = parse_data_uri(uri)
    return {'mime_type': mime, 'data': data}
