"""
Chatbot conversations, text to speech, the voice assistant and chat printouts.
"""
import io

from babel import Locale
from flask import abort, jsonify, request, send_file, session, current_app
from flask_login import current_user, login_required

from ekheti.ai.chatbot import provide_chatbot_advisory
from ekheti.ai.media import checked_image_uri, image_data_uri
from ekheti.ai.speech import generate_speech_from_text
from ekheti.chat import bp
from ekheti.errors import EkhetiError, FlowError
from ekheti.extensions import db
from ekheti.forms import ChatMessageForm, SpeechForm, VoiceForm, form_errors
from ekheti.models.chat import Conversation, Message, NEW_CHAT_TITLE, title_for
from ekheti.reports import build_chat_report
from ekheti.utils import reply_language

ACTIVE_KEY = 'active_conversation_id'


def _conversations():
    return current_user.conversations.order_by(Conversation.created_at.desc(), Conversation.id.desc())


def _get_conversation(conversation_id):
    conversation = current_user.conversations.filter_by(id=conversation_id).first()
    if conversation is None:
        abort(404, description='Conversation not found')
    return conversation


def _active_conversation():
    conversation_id = session.get(ACTIVE_KEY)
    if conversation_id is None:
        return None
    return current_user.conversations.filter_by(id=conversation_id).first()


@bp.route('/conversations')
@login_required
def list_conversations():
    active = _active_conversation()
    return jsonify({
        'conversations': [c.to_dict(with_messages=False) for c in _conversations()],
        'activeId': active.id if active else None,
    })


@bp.route('/conversations', methods=['POST'])
@login_required
def new_conversation():
    conversation = Conversation(user_id=current_user.id, title=NEW_CHAT_TITLE)
    db.session.add(conversation)
    db.session.commit()
    session[ACTIVE_KEY] = conversation.id
    return jsonify(conversation.to_dict()), 201


@bp.route('/conversations/<int:conversation_id>')
@login_required
def select_conversation(conversation_id):
    conversation = _get_conversation(conversation_id)
    session[ACTIVE_KEY] = conversation.id
    return jsonify(conversation.to_dict())


@bp.route('/conversations/<int:conversation_id>', methods=['DELETE'])
@login_required
def delete_conversation(conversation_id):
    conversation = _get_conversation(conversation_id)
    db.session.delete(conversation)
    db.session.commit()

    if session.get(ACTIVE_KEY) == conversation_id:
        newest = _conversations().first()
        session[ACTIVE_KEY] = newest.id if newest else None
    return jsonify({'deleted': conversation_id, 'activeId': session.get(ACTIVE_KEY)})


def _attachments(form):
    """Validated image data URI and document dict from the form, either may be None."""
    image_uri = None
    max_image = current_app.config['MAX_IMAGE_SIZE']
    if form.image.data:
        image_uri = image_data_uri(form.image.data.read(), max_image)
    elif form.image_data_uri.data:
        image_uri = checked_image_uri(form.image_data_uri.data, max_image)

    document = None
    if form.document.data:
        upload = form.document.data
        try:
            content = upload.read().decode('utf-8')
        except UnicodeDecodeError:
            abort(400, description='The document must be UTF-8 plain text.')
        document = {'name': upload.filename, 'type': upload.mimetype, 'content': content}
    return image_uri, document


@bp.route('/messages', methods=['POST'])
@login_required
def send_message():
    form = ChatMessageForm()
    if not form.validate_on_submit():
        return form_errors(form)

    text = (form.text.data or '').strip()
    image_uri, document = _attachments(form)

    conversation = _active_conversation()
    if conversation is None:
        conversation = Conversation(user_id=current_user.id,
                                    title=title_for(text, document['name'] if document else None))
        db.session.add(conversation)
        db.session.commit()
        session[ACTIVE_KEY] = conversation.id

    history = conversation.history(current_app.config['CHAT_HISTORY_WINDOW'])
    user_message = conversation.add_message('user', text, image_preview=image_uri, document=document)

    try:
        output = provide_chatbot_advisory(
            query=text or (f"Please analyze the attached document: {document['name']}" if document
                           else 'Please analyze the attached image.'),
            history=history,
            management_type=form.management_type.data,
            language=reply_language(),
            photo_data_uri=image_uri,
            document_content=document['content'] if document else None,
        )
    except EkhetiError:
        # the user message is not kept when there is no reply
        db.session.rollback()
        raise

    reply = conversation.add_message('assistant', output.advice)
    db.session.commit()
    return jsonify({
        'conversation': conversation.to_dict(with_messages=False),
        'message': user_message.to_dict(),
        'reply': reply.to_dict(),
    })


@bp.route('/speech', methods=['POST'])
@login_required
def speech():
    form = SpeechForm()
    if not form.validate_on_submit():
        return form_errors(form)
    return jsonify(generate_speech_from_text(form.text.data, form.language.data))


@bp.route('/messages/<int:message_id>/speech', methods=['POST'])
@login_required
def message_speech(message_id):
    message = Message.query.join(Conversation).filter(
        Message.id == message_id, Conversation.user_id == current_user.id).first()
    if message is None:
        abort(404, description='Message not found')
    language = request.args.get('language') or current_user.language or 'en'
    if language not in current_app.config['LANGUAGES']:
        abort(400, description=f'Unsupported speech language: {language}')
    return jsonify(generate_speech_from_text(message.text, language))


@bp.route('/voice-assistant', methods=['POST'])
@login_required
def voice_assistant():
    """Answer a spoken question (transcribed in the browser) and speak the reply."""
    form = VoiceForm()
    if not form.validate_on_submit():
        return form_errors(form)

    language = form.language.data
    output = provide_chatbot_advisory(
        query=form.transcript.data,
        management_type='Crops',
        language=Locale.parse(language).english_name,
    )
    result = {'transcript': form.transcript.data, 'advice': output.advice}
    try:
        result.update(generate_speech_from_text(output.advice, language))
    except FlowError as e:
        current_app.logger.warning('Voice reply not spoken: %s', e.message)
        result['warning'] = 'Could not generate audio for this reply.'
    return jsonify(result)


@bp.route('/conversations/<int:conversation_id>/print')
@login_required
def print_conversation(conversation_id):
    conversation = _get_conversation(conversation_id)
    pdf = build_chat_report(conversation)
    return send_file(io.BytesIO(pdf), mimetype='application/pdf',
                     download_name=f'eKheti_Chat_{conversation.id}.pdf')
