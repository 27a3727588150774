import pytest
from django.urls import reverse

from social.models import Comment, Notification, Reaction

pytestmark = pytest.mark.django_db


def test_create_comment(api, alice, bob, make_post, post_json):
    post = make_post(bob)
    response = post_json(api, reverse('create_comment', args=[post.id]), {'comment': 'line one\nline <two>'})

    assert response.status_code == 201
    data = response.json()
    assert data['comment'] == 'line one<br>line &lt;two&gt;'
    assert data['parent_id'] is None
    assert data['num_of_comments'] == 0
    assert data['comments'] == []
    assert data['user']['username'] == 'alice'
    assert Notification.objects.filter(user=bob, verb='comment_created').exists()


def test_reply_notifies_parent_author(api, alice, bob, carol, make_post, post_json):
    post = make_post(bob)
    parent = Comment.objects.create(post=post, user=carol, comment='first')

    response = post_json(api, reverse('create_comment', args=[post.id]), {
        'comment': 'reply',
        'parent_id': parent.id,
    })

    assert response.status_code == 201
    assert response.json()['parent_id'] == parent.id
    assert Notification.objects.filter(user=carol, verb='comment_reply').exists()
    assert Notification.objects.filter(user=bob, verb='comment_created').exists()


def test_parent_must_belong_to_the_post(api, alice, make_post, post_json):
    post = make_post(alice)
    other = Comment.objects.create(post=make_post(alice), user=alice, comment='x')

    response = post_json(api, reverse('create_comment', args=[post.id]), {
        'comment': 'reply',
        'parent_id': other.id,
    })
    assert response.status_code == 400


def test_empty_comment_is_rejected(api, alice, make_post, post_json):
    post = make_post(alice)
    response = post_json(api, reverse('create_comment', args=[post.id]), {'comment': '  '})
    assert response.status_code == 400


def test_comment_in_foreign_group_is_forbidden(api, bob, make_group, make_post, post_json):
    post = make_post(bob, group=make_group(bob))
    response = post_json(api, reverse('create_comment', args=[post.id]), {'comment': 'hi'})
    assert response.status_code == 403


def test_update_comment(api, alice, make_post, post_json):
    comment = Comment.objects.create(post=make_post(alice), user=alice, comment='old')
    response = post_json(api, reverse('update_comment', args=[comment.id]), {'comment': 'new'})

    assert response.status_code == 200
    assert response.json()['comment'] == 'new'


def test_update_comment_by_other_user_is_forbidden(api, bob, make_post, post_json):
    comment = Comment.objects.create(post=make_post(bob), user=bob, comment='old')
    response = post_json(api, reverse('update_comment', args=[comment.id]), {'comment': 'new'})
    assert response.status_code == 403


def test_delete_comment_removes_subtree(api, alice, make_post):
    post = make_post(alice)
    top = Comment.objects.create(post=post, user=alice, comment='top')
    reply = Comment.objects.create(post=post, user=alice, comment='reply', parent=top)
    Comment.objects.create(post=post, user=alice, comment='deep', parent=reply)
    sibling = Comment.objects.create(post=post, user=alice, comment='sibling')
    Reaction.objects.create(target=reply, user=alice)

    response = api.post(reverse('delete_comment', args=[top.id]))

    assert response.status_code == 200
    assert response.json() == {'deleted': 3}
    assert list(Comment.objects.values_list('id', flat=True)) == [sibling.id]
    assert Reaction.objects.count() == 0


def test_post_owner_can_delete_foreign_comment(api, alice, bob, make_post):
    comment = Comment.objects.create(post=make_post(alice), user=bob, comment='rude')

    response = api.post(reverse('delete_comment', args=[comment.id]))

    assert response.status_code == 200
    assert Notification.objects.filter(user=bob, verb='comment_deleted').exists()


def test_group_admin_can_delete_comment(api, alice, bob, carol, make_group, make_post):
    group = make_group(alice, members=[bob, carol])
    comment = Comment.objects.create(post=make_post(bob, group=group), user=carol, comment='x')

    assert api.post(reverse('delete_comment', args=[comment.id])).status_code == 200


def test_stranger_cannot_delete_comment(api, bob, carol, make_post):
    comment = Comment.objects.create(post=make_post(bob), user=carol, comment='x')
    assert api.post(reverse('delete_comment', args=[comment.id])).status_code == 403
    assert Comment.objects.filter(pk=comment.id).exists()


def test_comment_reaction_toggles(api, alice, bob, make_post):
    comment = Comment.objects.create(post=make_post(bob), user=bob, comment='nice')
    url = reverse('comment_reaction', args=[comment.id])

    assert api.post(url).json() == {'num_of_reactions': 1, 'current_user_has_reaction': True}
    assert Notification.objects.filter(user=bob, verb='comment_reaction').exists()
    assert api.post(url).json() == {'num_of_reactions': 0, 'current_user_has_reaction': False}


def test_comments_of_deleted_post_are_404(api, alice, make_post, post_json):
    post = make_post(alice)
    comment = Comment.objects.create(post=post, user=alice, comment='x')
    post.soft_delete(deleted_by=alice)

    assert post_json(api, reverse('update_comment', args=[comment.id]), {'comment': 'y'}).status_code == 404
    assert api.post(reverse('comment_reaction', args=[comment.id])).status_code == 404
