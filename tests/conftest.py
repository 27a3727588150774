"""
Shared pytest fixtures.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── media_root: Temporary MEDIA_ROOT so uploads never touch the repo
    ├── make_user: Factory for users
    ├── alice / bob / carol: Ready-made users
    ├── api: Django test client logged in as alice
    ├── make_group: Factory for groups with an approved admin owner
    ├── make_post: Factory for posts
    └── post_json: Helper posting JSON bodies
"""

import json

import pytest

from social.models import Group, GroupUser, GroupUserRole, GroupUserStatus, Post, User


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path / 'media'
    settings.STORAGES = {
        **settings.STORAGES,
        'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
        'staticfiles': {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'},
    }
    return settings.MEDIA_ROOT


@pytest.fixture
def make_user(db):
    def _make_user(username, **kwargs):
        kwargs.setdefault('email', f"{username}@example.com")
        return User.objects.create_user(username=username, password='pass12345', **kwargs)
    return _make_user


@pytest.fixture
def alice(make_user):
    return make_user('alice', name='Alice')


@pytest.fixture
def bob(make_user):
    return make_user('bob', name='Bob')


@pytest.fixture
def carol(make_user):
    return make_user('carol')


@pytest.fixture
def api(client, alice):
    client.force_login(alice)
    return client


@pytest.fixture
def make_group(db):
    def _make_group(owner, name='Book Club', members=(), **kwargs):
        group = Group.objects.create(name=name, user=owner, **kwargs)
        GroupUser.objects.create(
            group=group,
            user=owner,
            status=GroupUserStatus.APPROVED,
            role=GroupUserRole.ADMIN,
            created_by=owner,
        )
        for member in members:
            GroupUser.objects.create(
                group=group,
                user=member,
                status=GroupUserStatus.APPROVED,
                created_by=member,
            )
        return group
    return _make_group


@pytest.fixture
def make_post(db):
    def _make_post(user, body='Hello', group=None, **kwargs):
        return Post.objects.create(user=user, body=body, group=group, **kwargs)
    return _make_post


@pytest.fixture
def post_json():
    """POST a JSON body with the given client."""
    def _post_json(client, url, data=None):
        return client.post(url, data=json.dumps(data or {}), content_type='application/json')
    return _post_json
