from datetime import datetime, timedelta

from ekheti.community.routes import seed_posts
from ekheti.models.community import Post
from ekheti.utils import time_since


def test_empty_forum_is_seeded(auth_client):
    posts = auth_client.get('/api/community/posts').get_json()['posts']
    assert [p['userName'] for p in posts] == ['Jane Doe', 'John Smith']
    wheat = posts[0]
    assert wheat['cropOrFruitName'] == 'Wheat'
    assert wheat['likes'] == 12
    assert wheat['timeAgo'] == '1 days ago' or wheat['timeAgo'].endswith('hours ago')
    assert wheat['comments'][0]['userName'] == 'AgriExpert'
    assert posts[1]['likes'] == 25
    assert posts[1]['comments'] == []


def test_create_post_goes_first_with_placeholder_image(auth_client):
    auth_client.get('/api/community/posts')
    response = auth_client.post('/api/community/posts', json={
        'type': 'crop', 'item_name': 'Cotton', 'content': 'Pink bollworm spotted in my field, what should I spray?'})
    assert response.status_code == 201
    post = response.get_json()
    assert post['userName'] == 'Ramesh Kumar'
    assert post['imageUrl'] == 'https://picsum.photos/seed/Cotton/600/400'
    assert post['likes'] == 0

    posts = auth_client.get('/api/community/posts').get_json()['posts']
    assert posts[0]['id'] == post['id']


def test_post_validation(auth_client):
    response = auth_client.post('/api/community/posts', json={'type': 'flower', 'item_name': 'Rose', 'content': ''})
    assert response.status_code == 400
    assert set(response.get_json()['errors']) == {'type', 'content'}


def test_short_post_allowed_blank_post_rejected(auth_client):
    short = auth_client.post('/api/community/posts', json={'type': 'crop', 'item_name': 'Wheat', 'content': 'Help pls'})
    assert short.status_code == 201
    assert short.get_json()['content'] == 'Help pls'

    blank = auth_client.post('/api/community/posts', json={'type': 'crop', 'item_name': 'Wheat', 'content': '   '})
    assert blank.status_code == 400
    assert 'content' in blank.get_json()['errors']


def test_filters(auth_client):
    auth_client.get('/api/community/posts')
    auth_client.post('/api/community/posts', json={
        'type': 'fruit', 'item_name': 'Apple', 'content': 'Scab spots are spreading on my apple orchard.'})

    def names(post_filter):
        posts = auth_client.get(f'/api/community/posts?filter={post_filter}').get_json()['posts']
        return [p['cropOrFruitName'] for p in posts]

    assert names('all') == ['Apple', 'Wheat', 'Mango']
    assert names('crops') == ['Wheat']
    assert names('fruits') == ['Apple', 'Mango']
    assert names('Mango') == ['Mango']
    assert names('Rice') == []


def test_like_and_comment(auth_client):
    posts = auth_client.get('/api/community/posts').get_json()['posts']
    mango_id = posts[1]['id']

    liked = auth_client.post(f'/api/community/posts/{mango_id}/like').get_json()
    assert liked == {'id': mango_id, 'likes': 26}

    comment = auth_client.post(f'/api/community/posts/{mango_id}/comments',
                               json={'comment': 'Harvest when the shoulders fill out.'})
    assert comment.status_code == 201
    mango = auth_client.get('/api/community/posts?filter=Mango').get_json()['posts'][0]
    assert [c['comment'] for c in mango['comments']] == ['Harvest when the shoulders fill out.']
    assert mango['comments'][0]['userName'] == 'Ramesh Kumar'


def test_like_missing_post(auth_client):
    assert auth_client.post('/api/community/posts/999/like').status_code == 404


def test_seed_posts_ages(app):
    now = datetime(2024, 6, 10, 12, 0, 0)
    with app.app_context():
        seed_posts(now)
        ages = [p.to_dict(now)['timeAgo'] for p in Post.query.order_by(Post.id)]
    assert ages == ['24 hours ago', '2 days ago']


def test_time_since_units():
    now = datetime(2024, 6, 10, 12, 0, 0)
    assert time_since(now - timedelta(seconds=30), now) == '30 seconds ago'
    assert time_since(now - timedelta(minutes=5), now) == '5 minutes ago'
    assert time_since(now - timedelta(hours=3), now) == '3 hours ago'
    assert time_since(now - timedelta(days=45), now) == '1 months ago'
    assert time_since(now - timedelta(days=800), now) == '2 years ago'
