from datetime import timedelta

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from django.utils import timezone

from social.models import Group, GroupUser, GroupUserRole, GroupUserStatus, Notification

pytestmark = pytest.mark.django_db


def test_create_group_makes_creator_admin(api, alice, post_json):
    response = post_json(api, reverse('create_group'), {
        'name': 'Laravel Devs',
        'about': '<p>All about Laravel</p>',
        'auto_approval': False,
    })

    assert response.status_code == 201
    data = response.json()
    assert data['slug'] == 'laravel-devs'
    assert data['auto_approval'] is False
    assert data['status'] == 'approved'
    assert data['role'] == 'admin'
    assert data['description'] == 'All about Laravel'

    membership = GroupUser.objects.get(group_id=data['id'], user=alice)
    assert membership.is_admin


def test_group_slugs_are_unique(alice, make_group):
    first = make_group(alice, name='Chess')
    second = make_group(alice, name='Chess')
    assert first.slug == 'chess'
    assert second.slug == 'chess-2'


def test_create_group_requires_name(api, post_json):
    assert post_json(api, reverse('create_group'), {'name': ''}).status_code == 400


def test_group_profile_for_member(api, alice, bob, carol, make_group, make_post):
    group = make_group(alice, members=[bob], auto_approval=False)
    GroupUser.objects.create(group=group, user=carol, status=GroupUserStatus.PENDING)
    make_post(bob, 'inside', group=group)

    data = api.get(reverse('group_profile', args=[group.slug])).json()

    assert data['group']['role'] == 'admin'
    assert [post['body'] for post in data['posts']['data']] == ['inside']
    assert {u['username'] for u in data['users']} == {'alice', 'bob', 'carol'}
    assert [u['username'] for u in data['requests']] == ['carol']


def test_group_profile_for_outsider_hides_content(api, bob, make_group, make_post):
    group = make_group(bob)
    make_post(bob, 'secret', group=group)

    data = api.get(reverse('group_profile', args=[group.slug])).json()

    assert data['group']['status'] is None
    assert data['posts'] is None
    assert data['users'] == []


def test_update_group_admin_only(client, alice, bob, make_group, post_json):
    group = make_group(alice, members=[bob])
    url = reverse('update_group', args=[group.slug])

    client.force_login(bob)
    assert post_json(client, url, {'name': 'Hijacked'}).status_code == 403

    client.force_login(alice)
    response = post_json(client, url, {'name': 'Renamed', 'auto_approval': False})
    assert response.status_code == 200
    group.refresh_from_db()
    assert group.name == 'Renamed'
    assert group.auto_approval is False


def test_update_group_images(api, alice, make_group):
    group = make_group(alice)
    response = api.post(reverse('update_group_images', args=[group.slug]), {
        'cover': SimpleUploadedFile('cover.png', b'PNG', content_type='image/png'),
    })

    assert response.status_code == 200
    assert response.json()['success'] == 'Your cover image was updated'
    group.refresh_from_db()
    assert group.cover.name.endswith('cover.png')


def test_update_group_images_rejects_non_images(api, alice, make_group):
    group = make_group(alice)
    response = api.post(reverse('update_group_images', args=[group.slug]), {
        'thumbnail': SimpleUploadedFile('notes.txt', b'text', content_type='text/plain'),
    })
    assert response.status_code == 400


# ============================================================================
# JOINING
# ============================================================================

def test_join_auto_approval_group(client, alice, bob, make_group):
    group = make_group(alice)
    client.force_login(bob)

    data = client.post(reverse('group_join', args=[group.slug])).json()

    assert data['group']['status'] == 'approved'
    assert group.has_approved_user(bob.id)


def test_join_request_waits_for_admin(client, alice, bob, make_group):
    group = make_group(alice, auto_approval=False)
    client.force_login(bob)

    data = client.post(reverse('group_join', args=[group.slug])).json()

    assert data['group']['status'] == 'pending'
    assert not group.has_approved_user(bob.id)
    assert Notification.objects.filter(user=alice, verb='group_join_request').exists()


def test_approve_request(api, alice, bob, make_group, post_json):
    group = make_group(alice, auto_approval=False)
    GroupUser.objects.create(group=group, user=bob)

    response = post_json(api, reverse('group_approve_request', args=[group.slug]), {
        'user_id': bob.id,
        'action': 'approve',
    })

    assert response.status_code == 200
    assert response.json()['success'] == 'User "Bob" was approved'
    assert group.has_approved_user(bob.id)
    assert Notification.objects.filter(user=bob, verb='group_request_approved').exists()


def test_reject_request_allows_asking_again(api, alice, bob, make_group, post_json):
    group = make_group(alice, auto_approval=False)
    GroupUser.objects.create(group=group, user=bob)

    response = post_json(api, reverse('group_approve_request', args=[group.slug]), {
        'user_id': bob.id,
        'action': 'reject',
    })

    assert response.status_code == 200
    assert response.json()['success'] == 'User "Bob" was rejected'
    assert group.membership_for(bob.id) is None
    assert Notification.objects.filter(user=bob, verb='group_request_rejected').exists()


def test_approve_request_validates_action(api, alice, bob, make_group, post_json):
    group = make_group(alice, auto_approval=False)
    GroupUser.objects.create(group=group, user=bob)
    response = post_json(api, reverse('group_approve_request', args=[group.slug]), {
        'user_id': bob.id,
        'action': 'maybe',
    })
    assert response.status_code == 400


# ============================================================================
# INVITATIONS
# ============================================================================

def _invite(client, group, identifier, post_json):
    return post_json(client, reverse('group_invite', args=[group.slug]), {'email': identifier})


def test_invite_and_accept(client, alice, bob, make_group, post_json):
    group = make_group(alice, auto_approval=False)
    client.force_login(alice)

    assert _invite(client, group, 'bob@example.com', post_json).status_code == 200
    membership = group.membership_for(bob.id)
    assert membership.status == GroupUserStatus.PENDING
    assert len(membership.token) == 64
    notification = Notification.objects.get(user=bob, verb='group_invitation')
    assert reverse('group_accept_invitation', args=[membership.token]) in notification.message

    client.force_login(bob)
    response = client.get(reverse('group_accept_invitation', args=[membership.token]))

    assert response.status_code == 200
    membership.refresh_from_db()
    assert membership.is_approved
    assert membership.token_used is not None
    assert Notification.objects.filter(user=alice, verb='group_invitation_accepted').exists()

    again = client.get(reverse('group_accept_invitation', args=[membership.token]))
    assert again.status_code == 400
    assert again.json()['error'] == 'The link is already used'


def test_invite_by_username(api, alice, bob, make_group, post_json):
    group = make_group(alice)
    assert _invite(api, group, 'bob', post_json).status_code == 200
    assert group.membership_for(bob.id) is not None


def test_invite_unknown_or_member_user(api, alice, bob, make_group, post_json):
    group = make_group(alice, members=[bob])
    assert _invite(api, group, 'nobody@example.com', post_json).status_code == 400
    assert _invite(api, group, 'bob', post_json).status_code == 400


def test_expired_invitation(client, alice, bob, make_group):
    group = make_group(alice)
    GroupUser.objects.create(
        group=group,
        user=bob,
        token='t' * 64,
        token_expire_date=timezone.now() - timedelta(hours=1),
        created_by=alice,
    )
    client.force_login(bob)

    response = client.get(reverse('group_accept_invitation', args=['t' * 64]))

    assert response.status_code == 400
    assert response.json()['error'] == 'The link is expired'


def test_unknown_invitation_token(api):
    response = api.get(reverse('group_accept_invitation', args=['missing']))
    assert response.json()['error'] == 'The link is not valid'


def test_invitation_to_deleted_group_is_not_valid(client, alice, bob, make_group):
    group = make_group(alice)
    GroupUser.objects.create(
        group=group,
        user=bob,
        token='d' * 64,
        token_expire_date=timezone.now() + timedelta(hours=1),
        created_by=alice,
    )
    Group.objects.filter(pk=group.pk).update(deleted_at=timezone.now())
    client.force_login(bob)

    response = client.get(reverse('group_accept_invitation', args=['d' * 64]))

    assert response.json()['error'] == 'The link is not valid'
    assert GroupUser.objects.get(group=group, user=bob).status == GroupUserStatus.PENDING


def test_invitation_of_another_user_is_forbidden(api, alice, bob, carol, make_group):
    group = make_group(carol)
    GroupUser.objects.create(
        group=group,
        user=bob,
        token='x' * 64,
        token_expire_date=timezone.now() + timedelta(hours=1),
        created_by=carol,
    )
    assert api.get(reverse('group_accept_invitation', args=['x' * 64])).status_code == 403


# ============================================================================
# ROLES & REMOVAL
# ============================================================================

def test_change_role(api, alice, bob, make_group, post_json):
    group = make_group(alice, members=[bob])
    response = post_json(api, reverse('group_change_role', args=[group.slug]), {
        'user_id': bob.id,
        'role': 'admin',
    })

    assert response.status_code == 200
    assert response.json()['role'] == 'admin'
    assert group.is_admin(bob.id)
    assert Notification.objects.filter(user=bob, verb='group_role_changed').exists()


def test_owner_role_cannot_change(client, alice, bob, make_group, post_json):
    group = make_group(alice, members=[bob])
    GroupUser.objects.filter(group=group, user=bob).update(role=GroupUserRole.ADMIN)
    client.force_login(bob)

    response = post_json(client, reverse('group_change_role', args=[group.slug]), {
        'user_id': alice.id,
        'role': 'user',
    })

    assert response.status_code == 403
    assert group.is_admin(alice.id)


def test_remove_user(api, alice, bob, make_group, post_json):
    group = make_group(alice, members=[bob])
    response = post_json(api, reverse('group_remove_user', args=[group.slug]), {'user_id': bob.id})

    assert response.status_code == 200
    assert group.membership_for(bob.id) is None
    assert Notification.objects.filter(user=bob, verb='group_user_removed').exists()


def test_owner_cannot_be_removed(api, alice, make_group, post_json):
    group = make_group(alice)
    response = post_json(api, reverse('group_remove_user', args=[group.slug]), {'user_id': alice.id})
    assert response.status_code == 400


def test_soft_deleted_group_is_404(api, alice, make_group):
    group = make_group(alice)
    Group.objects.filter(pk=group.pk).update(deleted_at=timezone.now())
    assert api.get(reverse('group_profile', args=[group.slug])).status_code == 404
