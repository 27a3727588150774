"""
JSON representations of the social models.

Each ``*_resource`` function turns one model instance into the dict the API
returns. They read the data ``social.timeline`` prefetched
(``reactions_count``, ``current_user_reactions``,
``current_user_memberships``) and only fall back to queries when it is
missing, e.g. for a freshly created object.
"""

from django.urls import reverse
from django.utils import timezone
from django.utils.html import strip_tags
from django.utils.text import Truncator

from .comment_tree import build_comment_tree

DATETIME_FORMAT = '%Y-%m-%d %H:%M:%S'


def format_datetime(value):
    if value is None:
        return None
    return timezone.localtime(value).strftime(DATETIME_FORMAT)


def _has_reaction(obj, user_id):
    if hasattr(obj, 'current_user_reactions'):
        return len(obj.current_user_reactions) > 0
    if user_id is None:
        return False
    return obj.reactions.filter(user_id=user_id).exists()


def _reactions_count(obj):
    count = getattr(obj, 'reactions_count', None)
    if count is None:
        count = obj.reactions.count()
    return count


# ============================================================================
# USERS & GROUPS
# ============================================================================

def user_resource(user):
    return {
        'id': user.id,
        'name': user.display_name,
        'username': user.username,
        'avatar_url': user.avatar_url,
        'cover_url': user.cover_url,
        'pinned_post_id': user.pinned_post_id,
    }


def _membership_of(group, user_id):
    memberships = getattr(group, 'current_user_memberships', None)
    if memberships is not None:
        return memberships[0] if memberships else None
    if user_id is None:
        return None
    return group.membership_for(user_id)


def group_resource(group, user_id=None, membership=None):
    """
    Serialize a group as seen by ``user_id``.

    ``status`` and ``role`` describe the viewer's membership and are
    ``None`` when the viewer is not a member.
    """
    if membership is None:
        membership = _membership_of(group, user_id)
    return {
        'id': group.id,
        'name': group.name,
        'slug': group.slug,
        'about': group.about,
        'description': Truncator(strip_tags(group.about)).words(20),
        'auto_approval': group.auto_approval,
        'thumbnail_url': group.thumbnail_url,
        'cover_url': group.cover_url,
        'user_id': group.user_id,
        'pinned_post_id': group.pinned_post_id,
        'status': membership.status if membership else None,
        'role': membership.role if membership else None,
        'created_at': format_datetime(group.created_at),
        'updated_at': format_datetime(group.updated_at),
    }


def group_user_resource(membership):
    data = user_resource(membership.user)
    data.update({
        'role': membership.role,
        'status': membership.status,
        'group_id': membership.group_id,
    })
    return data


# ============================================================================
# POSTS & COMMENTS
# ============================================================================

def attachment_resource(attachment):
    return {
        'id': attachment.id,
        'name': attachment.name,
        'url': attachment.file.url,
        'download_url': reverse('download_attachment', args=[attachment.id]),
        'mime': attachment.mime,
        'size': attachment.size,
        'is_image': attachment.is_image,
    }


def comment_resource(node, user_id=None):
    """
    Serialize a ``CommentNode`` and, recursively, its replies.

    ``num_of_comments`` is the number of all replies below the comment,
    at any depth.
    """
    comment = node.comment
    return {
        'id': comment.id,
        'comment': comment.comment,
        'parent_id': comment.parent_id,
        'created_at': format_datetime(comment.created_at),
        'updated_at': format_datetime(comment.updated_at),
        'num_of_reactions': _reactions_count(comment),
        'num_of_comments': node.num_of_comments,
        'current_user_has_reaction': _has_reaction(comment, user_id),
        'comments': [comment_resource(child, user_id) for child in node.children],
        'user': user_resource(comment.user),
    }


def post_resource(post, user_id=None):
    comments = list(post.comments.all())
    tree = build_comment_tree(comments)

    return {
        'id': post.id,
        'body': post.body,
        'preview': post.preview,
        'preview_url': post.preview_url,
        'created_at': format_datetime(post.created_at),
        'updated_at': format_datetime(post.updated_at),
        'user': user_resource(post.user),
        'group': group_resource(post.group, user_id) if post.group_id else None,
        'attachments': [attachment_resource(a) for a in post.attachments.all()],
        'num_of_reactions': _reactions_count(post),
        'current_user_has_reaction': _has_reaction(post, user_id),
        'comments': [comment_resource(node, user_id) for node in tree],
        'num_of_comments': len(comments),
    }


# ============================================================================
# NOTIFICATIONS & PAGINATION
# ============================================================================

def notification_resource(notification):
    return {
        'id': notification.id,
        'verb': notification.verb,
        'message': notification.message,
        'actor': user_resource(notification.actor) if notification.actor_id else None,
        'post_id': notification.post_id,
        'comment_id': notification.comment_id,
        'group_id': notification.group_id,
        'is_read': notification.is_read,
        'created_at': format_datetime(notification.created_at),
    }


def paginated_resource(page, serializer):
    """Wrap a Django ``Page`` in ``data`` / ``meta`` / ``links``."""
    paginator = page.paginator
    return {
        'data': [serializer(item) for item in page.object_list],
        'meta': {
            'current_page': page.number,
            'last_page': paginator.num_pages,
            'per_page': paginator.per_page,
            'total': paginator.count,
        },
        'links': {
            'next': page.next_page_number() if page.has_next() else None,
            'prev': page.previous_page_number() if page.has_previous() else None,
        },
    }
