import pytest

from accounts.models import Role
from blogs.models import Blog, BlogStatus

pytestmark = pytest.mark.django_db


@pytest.fixture
def staff(make_user):
    make_user('admin@x.com', role=Role.ADMIN)
    make_user('vol@x.com', role=Role.VOLUNTEER)
    make_user('u1@x.com')


def _blog(title, **fields):
    fields.setdefault('content', 'Body')
    fields.setdefault('author_email', 'vol@x.com')
    return Blog.objects.create(title=title, **fields)


def test_listing_is_public_and_pages_by_six(api_client, backdate):
    for i in range(8):
        backdate(_blog(f'Post {i}'), minutes_ago=i)

    response = api_client.get('/blogs')

    assert response.status_code == 200
    assert response.data['total'] == 8
    assert response.data['pages'] == 2
    assert [b['title'] for b in response.data['blogs']] == [f'Post {i}' for i in range(6)]


def test_listing_ignores_stale_authorization_header(api_client):
    api_client.credentials(HTTP_AUTHORIZATION='Bearer expired.or.garbage')
    assert api_client.get('/blogs').status_code == 200


def test_search_is_case_insensitive_substring(api_client):
    _blog('Why Donate Blood')
    _blog('Platelet basics')

    response = api_client.get('/blogs', {'search': 'donate'})

    assert [b['title'] for b in response.data['blogs']] == ['Why Donate Blood']


def test_listing_filters_status_and_category(api_client):
    _blog('A', status=BlogStatus.PUBLISHED, category='health')
    _blog('B', status=BlogStatus.DRAFT, category='health')
    _blog('C', status=BlogStatus.PUBLISHED, category='events')

    response = api_client.get('/blogs', {'status': 'published', 'category': 'health', 'search': ''})

    assert [b['title'] for b in response.data['blogs']] == ['A']


def test_volunteer_drafts_post(staff, client_for):
    response = client_for('vol@x.com').post(
        '/blogs', {'title': 'New', 'content': 'Text', 'status': 'published', 'authorEmail': 'x@x.com'}
    )

    assert response.status_code == 201
    blog = Blog.objects.get()
    assert response.data['insertedId'] == str(blog.pk)
    assert blog.status == BlogStatus.DRAFT
    assert blog.author_email == 'vol@x.com'


def test_donor_may_not_post(staff, client_for):
    assert client_for('u1@x.com').post('/blogs', {'title': 'New', 'content': 'Text'}).status_code == 403
    assert Blog.objects.count() == 0


def test_post_requires_title_and_content(staff, client_for):
    response = client_for('admin@x.com').post('/blogs', {'category': 'health'})
    assert response.status_code == 400
    assert set(response.data['errors']) == {'title', 'content'}


def test_detail_requires_credential(api_client, staff, client_for):
    blog = _blog('Read me')

    assert api_client.get(f'/blogs/{blog.pk}').status_code == 401
    assert client_for('u1@x.com').get(f'/blogs/{blog.pk}').data['title'] == 'Read me'
    assert client_for('u1@x.com').get('/blogs/not-an-id').status_code == 404


def test_admin_publishes_post(staff, client_for):
    blog = _blog('Draft')
    client = client_for('admin@x.com')

    assert client.patch(f'/blogs/{blog.pk}/published').data == {
        'acknowledged': True, 'matchedCount': 1, 'modifiedCount': 1,
    }
    assert client.patch(f'/blogs/{blog.pk}/published').data['modifiedCount'] == 0
    blog.refresh_from_db()
    assert blog.status == BlogStatus.PUBLISHED


def test_status_route_rejects_unknown_label(staff, client_for):
    blog = _blog('Draft')
    response = client_for('admin@x.com').patch(f'/blogs/{blog.pk}/archived')
    assert response.status_code == 400
    assert 'status' in response.data['errors']


def test_status_of_unknown_post_matches_nothing(staff, client_for):
    response = client_for('admin@x.com').patch('/blogs/00000000-0000-0000-0000-000000000000/published')
    assert response.data == {'acknowledged': True, 'matchedCount': 0, 'modifiedCount': 0}


def test_volunteer_may_not_publish(staff, client_for):
    blog = _blog('Draft')
    assert client_for('vol@x.com').patch(f'/blogs/{blog.pk}/published').status_code == 403


def test_admin_deletes_post(staff, client_for):
    blog = _blog('Gone')
    assert client_for('vol@x.com').delete(f'/blogs/{blog.pk}').status_code == 403
    assert client_for('admin@x.com').delete(f'/blogs/{blog.pk}').data == {'acknowledged': True, 'deletedCount': 1}
    assert client_for('admin@x.com').delete(f'/blogs/{blog.pk}').data['deletedCount'] == 0
