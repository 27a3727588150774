import pytest
from django.db import connection
from django.test.utils import CaptureQueriesContext
from django.utils import timezone

from social.models import Comment, Follower, Group, GroupUser, GroupUserStatus, Reaction
from social.resources import paginated_resource, post_resource
from social.timeline import (
    group_timeline, home_timeline, load_comment_node, paginate, profile_timeline,
)

pytestmark = pytest.mark.django_db


def post_ids(queryset):
    return [post.id for post in queryset]


def test_home_timeline_contains_own_followed_and_group_posts(alice, bob, carol, make_group, make_post):
    Follower.objects.create(user=bob, follower=alice)
    group = make_group(carol, members=[alice])
    other_group = make_group(carol, name='Private')

    own = make_post(alice, 'mine')
    followed = make_post(bob, 'from bob')
    in_group = make_post(carol, 'group news', group=group)
    make_post(carol, 'not followed')
    make_post(bob, 'bob in a group alice is not in', group=other_group)

    assert post_ids(home_timeline(alice)) == [in_group.id, followed.id, own.id]


def test_home_timeline_skips_pending_memberships_and_deleted_posts(alice, bob, make_group, make_post):
    group = make_group(bob)
    GroupUser.objects.create(group=group, user=alice, status=GroupUserStatus.PENDING)
    make_post(bob, 'hidden', group=group)
    deleted = make_post(alice, 'gone')
    deleted.soft_delete(deleted_by=alice)

    assert post_ids(home_timeline(alice)) == []


def test_home_timeline_hides_posts_of_deleted_groups(alice, bob, make_group, make_post):
    group = make_group(bob, members=[alice])
    make_post(alice, 'mine, but in the group', group=group)
    make_post(bob, 'group news', group=group)
    Group.objects.filter(pk=group.pk).update(deleted_at=timezone.now())

    assert post_ids(home_timeline(alice)) == []


def test_group_timeline_puts_pinned_post_first(alice, make_group, make_post):
    group = make_group(alice)
    first = make_post(alice, 'first', group=group)
    second = make_post(alice, 'second', group=group)
    third = make_post(alice, 'third', group=group)

    assert post_ids(group_timeline(group, alice)) == [third.id, second.id, first.id]

    group.pinned_post = first
    group.save()
    assert post_ids(group_timeline(group, alice)) == [first.id, third.id, second.id]


def test_profile_timeline_lists_only_non_group_posts(alice, bob, make_group, make_post):
    group = make_group(alice)
    older = make_post(alice, 'older')
    make_post(alice, 'in group', group=group)
    newer = make_post(alice, 'newer')

    alice.pinned_post = older
    alice.save()

    assert post_ids(profile_timeline(alice, bob)) == [older.id, newer.id]


def test_reaction_state_is_per_viewer(alice, bob, make_post):
    post = make_post(alice)
    Reaction.objects.create(target=post, user=bob)

    as_bob = post_resource(profile_timeline(alice, bob)[0], bob.id)
    as_alice = post_resource(profile_timeline(alice, alice)[0], alice.id)

    assert as_bob['num_of_reactions'] == 1
    assert as_bob['current_user_has_reaction'] is True
    assert as_alice['num_of_reactions'] == 1
    assert as_alice['current_user_has_reaction'] is False


def test_post_resource_nests_comments(alice, bob, make_post):
    post = make_post(alice)
    top = Comment.objects.create(post=post, user=bob, comment='top')
    reply = Comment.objects.create(post=post, user=alice, comment='reply', parent=top)
    Comment.objects.create(post=post, user=bob, comment='deep', parent=reply)
    Comment.objects.create(post=post, user=bob, comment='second top')

    data = post_resource(profile_timeline(alice, alice)[0], alice.id)

    assert data['num_of_comments'] == 4
    assert [item['comment'] for item in data['comments']] == ['second top', 'top']
    top_data = data['comments'][1]
    assert top_data['num_of_comments'] == 2
    assert top_data['comments'][0]['comment'] == 'reply'
    assert top_data['comments'][0]['comments'][0]['comment'] == 'deep'


def test_load_comment_node_includes_subtree(alice, make_post):
    post = make_post(alice)
    top = Comment.objects.create(post=post, user=alice, comment='top')
    reply = Comment.objects.create(post=post, user=alice, comment='reply', parent=top)
    Comment.objects.create(post=post, user=alice, comment='deep', parent=reply)

    node = load_comment_node(top.id, alice.id)
    assert node.num_of_comments == 2
    assert node.children[0].id == reply.id
    assert load_comment_node(999999, alice.id) is None


def test_paginated_resource_meta(alice, make_post, settings):
    settings.TIMELINE_PAGE_SIZE = 2
    for i in range(5):
        make_post(alice, f"post {i}")

    page = paginate(home_timeline(alice), 2)
    data = paginated_resource(page, lambda post: post_resource(post, alice.id))

    assert [item['body'] for item in data['data']] == ['post 2', 'post 1']
    assert data['meta'] == {'current_page': 2, 'last_page': 3, 'per_page': 2, 'total': 5}
    assert data['links'] == {'next': 3, 'prev': 1}


def test_invalid_page_falls_back(alice, make_post):
    make_post(alice)
    assert paginate(home_timeline(alice), 'abc').number == 1
    assert paginate(home_timeline(alice), 50).number == 1


def _serialize_home(user):
    page = paginate(home_timeline(user), 1)
    return paginated_resource(page, lambda post: post_resource(post, user.id))


def _seed(user, group, make_post, count):
    for i in range(count):
        post = make_post(user, f"post {i}", group=group if i % 2 else None)
        parent = Comment.objects.create(post=post, user=user, comment='c')
        Comment.objects.create(post=post, user=user, comment='r', parent=parent)
        Reaction.objects.create(target=post, user=user)
        Reaction.objects.create(target=parent, user=user)


def test_timeline_query_count_does_not_grow_with_page_size(alice, make_group, make_post):
    group = make_group(alice)
    _seed(alice, group, make_post, 2)
    with CaptureQueriesContext(connection) as small:
        _serialize_home(alice)

    _seed(alice, group, make_post, 6)
    with CaptureQueriesContext(connection) as large:
        _serialize_home(alice)

    assert len(large.captured_queries) == len(small.captured_queries)
