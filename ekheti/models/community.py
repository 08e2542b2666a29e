"""
Community forum models.
"""
from ekheti.extensions import db

POST_TYPES = ('crop', 'fruit')


def placeholder_image(item_name):
    return f'https://picsum.photos/seed/{item_name}/600/400'


class Post(db.Model):
    __tablename__ = 'posts'

    id = db.Column(db.Integer, primary_key=True)
    author_id = db.Column(db.Integer, db.ForeignKey('users.id'))
    author_name = db.Column(db.String(100), nullable=False)
    type = db.Column(db.String(10), nullable=False)  # crop, fruit
    item_name = db.Column(db.String(100), nullable=False)
    content = db.Column(db.Text, nullable=False)
    image_url = db.Column(db.Text, nullable=False)
    likes = db.Column(db.Integer, default=0, nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.now())

    # Relationships
    author = db.relationship('User', back_populates='posts')
    comments = db.relationship('Comment', back_populates='post', order_by='Comment.id',
                               cascade='all, delete-orphan')

    def to_dict(self, now=None):
        from ekheti.utils import time_since
        return {
            'id': self.id,
            'userName': self.author_name,
            'type': self.type,
            'cropOrFruitName': self.item_name,
            'content': self.content,
            'imageUrl': self.image_url,
            'timestamp': self.created_at.isoformat(),
            'timeAgo': time_since(self.created_at, now),
            'likes': self.likes,
            'comments': [c.to_dict() for c in self.comments],
        }


class Comment(db.Model):
    __tablename__ = 'comments'

    id = db.Column(db.Integer, primary_key=True)
    post_id = db.Column(db.Integer, db.ForeignKey('posts.id'), nullable=False)
    author_id = db.Column(db.Integer, db.ForeignKey('users.id'))
    author_name = db.Column(db.String(100), nullable=False)
    comment = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime, default=db.func.now())

    post = db.relationship('Post', back_populates='comments')

    def to_dict(self):
        return {
            'id': self.id,
            'userName': self.author_name,
            'comment': self.comment,
            'timestamp': self.created_at.isoformat(),
        }
