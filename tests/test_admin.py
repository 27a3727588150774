from unittest.mock import patch

import pytest
from django.contrib import admin
from django.contrib.auth.models import Group as AuthGroup
from django.utils import timezone

from social.admin import GroupAdmin, PostAdmin
from social.models import (
    Comment, Follower, Group, GroupUser, Notification, Post, PostAttachment, Reaction, User,
)


def test_models_are_registered():
    for model in (User, Group, GroupUser, Post, PostAttachment, Comment, Reaction, Follower, Notification):
        assert admin.site.is_registered(model), model.__name__


def test_auth_groups_are_hidden():
    assert not admin.site.is_registered(AuthGroup)


@pytest.mark.django_db
def test_restore_groups_action(alice, make_group):
    group = make_group(alice)
    Group.objects.filter(pk=group.pk).update(deleted_at=timezone.now())
    model_admin = GroupAdmin(Group, admin.site)

    assert 'restore_groups' in model_admin.actions
    assert group.pk in model_admin.get_queryset(None).values_list('pk', flat=True)

    with patch.object(GroupAdmin, 'message_user') as message_user:
        model_admin.restore_groups(None, Group.all_objects.filter(pk=group.pk))

    message_user.assert_called_once_with(None, "1 groups restored")
    assert Group.objects.filter(pk=group.pk).exists()


@pytest.mark.django_db
def test_restore_posts_action(alice, make_post):
    post = make_post(alice)
    post.soft_delete(deleted_by=alice)
    model_admin = PostAdmin(Post, admin.site)

    with patch.object(PostAdmin, 'message_user'):
        model_admin.restore_posts(None, Post.all_objects.filter(pk=post.pk))

    restored = Post.objects.get(pk=post.pk)
    assert restored.deleted_by is None
