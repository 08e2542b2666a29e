"""
Community forum: posts, likes and comments.
"""
from datetime import datetime, timedelta

from flask import abort, jsonify, request
from flask_login import current_user, login_required

from ekheti.extensions import db
from ekheti.forms import CommentForm, PostForm, form_errors
from ekheti.models.community import Comment, Post, placeholder_image
from ekheti.community import bp


def seed_posts(now=None):
    """Two sample posts so an empty forum has something to show."""
    now = now or datetime.utcnow()
    wheat = Post(
        author_name='Jane Doe',
        type='crop',
        item_name='Wheat',
        content='My wheat leaves are turning yellow. I have already applied fertilizer. What could be the issue?',
        image_url=placeholder_image('wheat'),
        likes=12,
        created_at=now - timedelta(days=1),
    )
    wheat.comments.append(Comment(
        author_name='AgriExpert',
        comment='It could be a nitrogen deficiency or a fungal infection like rust. '
                'Can you share a closer image of the leaves?',
        created_at=now - timedelta(hours=20),
    ))
    mango = Post(
        author_name='John Smith',
        type='fruit',
        item_name='Mango',
        content='What is the best time to harvest mangoes for maximum sweetness? I am growing the "Alphonso" variety.',
        image_url=placeholder_image('mango'),
        likes=25,
        created_at=now - timedelta(days=2),
    )
    db.session.add_all([wheat, mango])
    db.session.commit()


def _filtered(query, post_filter):
    if post_filter == 'crops':
        return query.filter(Post.type == 'crop')
    if post_filter == 'fruits':
        return query.filter(Post.type == 'fruit')
    if post_filter and post_filter != 'all':
        return query.filter(Post.item_name == post_filter)
    return query


def _get_post(post_id):
    post = db.session.get(Post, post_id)
    if post is None:
        abort(404, description='Post not found')
    return post


@bp.route('/posts')
@login_required
def list_posts():
    if Post.query.first() is None:
        seed_posts()
    query = _filtered(Post.query, request.args.get('filter', 'all'))
    posts = query.order_by(Post.created_at.desc(), Post.id.desc()).all()
    return jsonify({'posts': [p.to_dict() for p in posts]})


@bp.route('/posts', methods=['POST'])
@login_required
def create_post():
    form = PostForm()
    if not form.validate_on_submit():
        return form_errors(form)
    item_name = form.item_name.data.strip()
    post = Post(
        author_id=current_user.id,
        author_name=current_user.display_name,
        type=form.type.data,
        item_name=item_name,
        content=form.content.data.strip(),
        image_url=form.image_url.data or placeholder_image(item_name),
        likes=0,
        created_at=datetime.utcnow(),
    )
    db.session.add(post)
    db.session.commit()
    return jsonify(post.to_dict()), 201


@bp.route('/posts/<int:post_id>/like', methods=['POST'])
@login_required
def like_post(post_id):
    post = _get_post(post_id)
    post.likes = Post.likes + 1
    db.session.commit()
    return jsonify({'id': post.id, 'likes': post.likes})


@bp.route('/posts/<int:post_id>/comments', methods=['POST'])
@login_required
def add_comment(post_id):
    post = _get_post(post_id)
    form = CommentForm()
    if not form.validate_on_submit():
        return form_errors(form)
    comment = Comment(post_id=post.id, author_id=current_user.id, author_name=current_user.display_name,
                      comment=form.comment.data.strip(), created_at=datetime.utcnow())
    db.session.add(comment)
    db.session.commit()
    return jsonify(comment.to_dict()), 201
