"""
================================================================================
SOCIALHUB - NOTIFICATIONS
================================================================================

One function per activity the application tells users about. Each writes
``Notification`` rows (bulk for fan-out) and logs the event. Delivering
notifications over mail or push is outside this module; any channel can
read the rows.

VERBS
================================================================================
post_created, post_deleted, comment_created, comment_reply,
comment_deleted, post_reaction, comment_reaction, followed,
group_join_request, group_request_approved, group_request_rejected,
group_invitation, group_invitation_accepted, group_role_changed,
group_user_removed
"""

import logging

from django.urls import reverse

from .models import Notification

logger = logging.getLogger(__name__)


def _notify(recipients, verb, message, actor=None, post=None, comment=None, group=None):
    """Create one notification per distinct recipient, skipping the actor."""
    seen = set()
    rows = []
    for recipient in recipients:
        if recipient.id in seen or (actor is not None and recipient.id == actor.id):
            continue
        seen.add(recipient.id)
        rows.append(Notification(
            user=recipient,
            actor=actor,
            verb=verb,
            message=message[:255],
            post=post,
            comment=comment,
            group=group,
        ))
    Notification.objects.bulk_create(rows)
    logger.info(f"Notification {verb} sent to {len(rows)} user(s)")
    return rows


# ============================================================================
# POSTS
# ============================================================================

def post_created(post, author):
    recipients = [follow.follower for follow in author.followers.select_related('follower')]
    if post.group_id:
        recipients = list(post.group.approved_users()) + recipients
        message = f"{author.display_name} posted in {post.group.name}"
    else:
        message = f"{author.display_name} shared a new post"
    return _notify(recipients, 'post_created', message, actor=author, post=post, group=post.group)


def post_deleted(post, deleted_by):
    if post.group_id:
        message = f"Your post was deleted by an admin of {post.group.name}"
    else:
        message = "Your post was deleted"
    return _notify([post.user], 'post_deleted', message, actor=deleted_by, group=post.group)


def post_reaction_added(post, user):
    message = f"{user.display_name} liked your post"
    return _notify([post.user], 'post_reaction', message, actor=user, post=post)


# ============================================================================
# COMMENTS
# ============================================================================

def comment_created(comment, post):
    author = comment.user
    sent = _notify(
        [post.user],
        'comment_created',
        f"{author.display_name} commented on your post",
        actor=author, post=post, comment=comment,
    )
    if comment.parent_id and comment.parent.user_id != post.user_id:
        sent += _notify(
            [comment.parent.user],
            'comment_reply',
            f"{author.display_name} replied to your comment",
            actor=author, post=post, comment=comment,
        )
    return sent


def comment_deleted(comment, post, deleted_by):
    message = "Your comment was deleted"
    return _notify([comment.user], 'comment_deleted', message, actor=deleted_by, post=post)


def comment_reaction_added(comment, user):
    message = f"{user.display_name} liked your comment"
    return _notify([comment.user], 'comment_reaction', message, actor=user, post=comment.post, comment=comment)


# ============================================================================
# SOCIAL GRAPH
# ============================================================================

def followed(user, follower):
    message = f"{follower.display_name} started following you"
    return _notify([user], 'followed', message, actor=follower)


# ============================================================================
# GROUPS
# ============================================================================

def group_join_requested(group, user):
    message = f"{user.display_name} requested to join {group.name}"
    return _notify(group.admin_users(), 'group_join_request', message, actor=user, group=group)


def group_request_approved(group, user, admin):
    message = f"Your request to join {group.name} was approved"
    return _notify([user], 'group_request_approved', message, actor=admin, group=group)


def group_request_rejected(group, user, admin):
    message = f"Your request to join {group.name} was rejected"
    return _notify([user], 'group_request_rejected', message, actor=admin, group=group)


def group_invitation(group, membership, admin):
    url = reverse('group_accept_invitation', args=[membership.token])
    message = f"{admin.display_name} invited you to join {group.name}: {url}"
    return _notify([membership.user], 'group_invitation', message, actor=admin, group=group)


def group_invitation_accepted(group, user):
    message = f"{user.display_name} joined {group.name}"
    return _notify(group.admin_users(), 'group_invitation_accepted', message, actor=user, group=group)


def group_role_changed(group, user, role, admin):
    message = f"Your role in {group.name} was changed to {role}"
    return _notify([user], 'group_role_changed', message, actor=admin, group=group)


def group_user_removed(group, user, admin):
    message = f"You were removed from {group.name}"
    return _notify([user], 'group_user_removed', message, actor=admin, group=group)
