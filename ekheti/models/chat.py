"""
Chat conversation models.
"""
from ekheti.extensions import db

NEW_CHAT_TITLE = 'New Chat'
TITLE_LENGTH = 30


def title_for(text, document_name=None):
    """Title a conversation after its first message."""
    return document_name or (text or '')[:TITLE_LENGTH] or NEW_CHAT_TITLE


class Conversation(db.Model):
    __tablename__ = 'conversations'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    title = db.Column(db.String(100), nullable=False, default=NEW_CHAT_TITLE)
    created_at = db.Column(db.DateTime, default=db.func.now())

    # Relationships
    user = db.relationship('User', back_populates='conversations')
    messages = db.relationship('Message', back_populates='conversation', order_by='Message.id',
                               cascade='all, delete-orphan')

    def add_message(self, role, text, image_preview=None, document=None):
        """Append a message; the first one retitles the conversation."""
        if not self.messages:
            self.title = title_for(text, document['name'] if document else None)
        message = Message(role=role, text=text, image_preview=image_preview)
        if document:
            message.document_name = document['name']
            message.document_type = document['type']
            message.document_content = document['content']
        self.messages.append(message)
        return message

    def history(self, window):
        """The last `window` messages as flow history entries."""
        return [{'role': m.role, 'text': m.text} for m in self.messages[-window:]] if window else []

    def to_dict(self, with_messages=True):
        data = {
            'id': self.id,
            'title': self.title,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
        if with_messages:
            data['messages'] = [m.to_dict() for m in self.messages]
        return data


class Message(db.Model):
    __tablename__ = 'messages'

    id = db.Column(db.Integer, primary_key=True)
    conversation_id = db.Column(db.Integer, db.ForeignKey('conversations.id'), nullable=False)
    role = db.Column(db.String(10), nullable=False)  # user, assistant
    text = db.Column(db.Text, nullable=False, default='')
    image_preview = db.Column(db.Text)  # data URI
    document_name = db.Column(db.String(255))
    document_type = db.Column(db.String(100))
    document_content = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=db.func.now())

    conversation = db.relationship('Conversation', back_populates='messages')

    def to_dict(self):
        data = {'id': self.id, 'role': self.role, 'text': self.text}
        if self.image_preview:
            data['imagePreview'] = self.image_preview
        if self.document_name:
            data['document'] = {
                'name': self.document_name,
                'type': self.document_type,
                'content': self.document_content,
            }
        return data
