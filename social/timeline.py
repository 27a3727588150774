"""
================================================================================
SOCIALHUB - TIMELINE QUERIES
================================================================================

Builds the post querysets behind every feed in the application. All of them
start from ``posts_for_timeline`` which loads, in a fixed number of
queries regardless of page size:

    posts ─┬─ user, group                      (JOIN)
           ├─ reactions_count                  (annotated COUNT)
           ├─ attachments                      (prefetch)
           ├─ group membership of the viewer   (prefetch, to_attr)
           ├─ viewer's reaction on the post    (prefetch, to_attr)
           └─ comments (newest first)          (prefetch)
                 ├─ user                       (JOIN)
                 ├─ reactions_count            (annotated COUNT)
                 └─ viewer's reaction          (prefetch, to_attr)

Serializers read ``current_user_reactions`` instead of querying, and the
comment tree is materialized from the prefetched flat list.

FEEDS
================================================================================
- home:    own posts, non-group posts of followed users, posts of groups
           where the viewer is an approved member
- group:   posts of one group, pinned post first
- profile: non-group posts of one user, pinned post first
"""

from django.conf import settings
from django.core.paginator import Paginator
from django.db.models import Case, Count, IntegerField, Prefetch, Q, Value, When

from .comment_tree import CommentNode, build_comment_tree
from .models import (
    Comment, Follower, GroupUser, GroupUserStatus, Post, PostAttachment, Reaction
)


# ============================================================================
# BUILDING BLOCKS
# ============================================================================

def visible_posts():
    """Posts that are not soft-deleted and not inside a soft-deleted group."""
    return Post.objects.filter(Q(group__isnull=True) | Q(group__deleted_at__isnull=True))


def current_user_reactions(user_id):
    """Prefetch only the viewer's reactions into ``current_user_reactions``."""
    return Prefetch(
        'reactions',
        queryset=Reaction.objects.filter(user_id=user_id),
        to_attr='current_user_reactions',
    )


def comments_with_reactions(user_id):
    return (
        Comment.objects
        .select_related('user')
        .annotate(reactions_count=Count('reactions', distinct=True))
        .prefetch_related(current_user_reactions(user_id))
        .order_by('-created_at', '-id')
    )


def posts_for_timeline(user_id, latest=True):
    """
    Base queryset for any list of posts shown to ``user_id``.

    Args:
        user_id: Viewer; drives the per-user reaction and membership state.
        latest: Order newest first. Callers that need their own ordering
            (pinned posts) pass ``False``.
    """
    queryset = (
        visible_posts()
        .select_related('user', 'group')
        .annotate(reactions_count=Count('reactions', distinct=True))
        .prefetch_related(
            'attachments',
            Prefetch(
                'group__memberships',
                queryset=GroupUser.objects.filter(user_id=user_id),
                to_attr='current_user_memberships',
            ),
            Prefetch('comments', queryset=comments_with_reactions(user_id)),
            current_user_reactions(user_id),
        )
    )
    if latest:
        queryset = queryset.order_by('-created_at', '-id')
    return queryset


def load_post(post_id, user_id):
    """A single post with the same related data a timeline entry carries."""
    return posts_for_timeline(user_id, latest=False).filter(pk=post_id).first()


def load_comment_node(comment_id, user_id):
    """
    A comment with its reply subtree, annotated like timeline comments.

    Returns ``None`` when the comment does not exist.
    """
    comment = comments_with_reactions(user_id).filter(pk=comment_id).first()
    if comment is None:
        return None
    replies = comments_with_reactions(user_id).filter(post_id=comment.post_id)
    children = build_comment_tree(replies, parent_id=comment.id)
    total = len(children) + sum(child.num_of_comments for child in children)
    return CommentNode(comment=comment, children=children, num_of_comments=total)


def pinned_first(queryset, pinned_post_id):
    """Order ``pinned_post_id`` first, then newest first."""
    if not pinned_post_id:
        return queryset.order_by('-created_at', '-id')
    return queryset.annotate(
        is_pinned=Case(
            When(pk=pinned_post_id, then=Value(1)),
            default=Value(0),
            output_field=IntegerField(),
        )
    ).order_by('-is_pinned', '-created_at', '-id')


def paginate(queryset, page_number, per_page=None):
    """Return a Django ``Page``; invalid page numbers fall back like ``get_page``."""
    paginator = Paginator(queryset, per_page or settings.TIMELINE_PAGE_SIZE)
    return paginator.get_page(page_number)


# ============================================================================
# FEEDS
# ============================================================================

def home_timeline(user):
    followed_ids = Follower.objects.filter(follower_id=user.id).values('user_id')
    group_ids = GroupUser.objects.filter(
        user_id=user.id,
        status=GroupUserStatus.APPROVED,
        group__deleted_at__isnull=True,
    ).values('group_id')

    return posts_for_timeline(user.id).filter(
        Q(user_id=user.id)
        | Q(user_id__in=followed_ids, group__isnull=True)
        | Q(group_id__in=group_ids)
    )


def group_timeline(group, user):
    queryset = posts_for_timeline(user.id, latest=False).filter(group=group)
    return pinned_first(queryset, group.pinned_post_id)


def profile_timeline(profile_user, viewer):
    queryset = posts_for_timeline(viewer.id, latest=False).filter(
        user=profile_user,
        group__isnull=True,
    )
    return pinned_first(queryset, profile_user.pinned_post_id)


def group_photos(group):
    return (
        PostAttachment.objects
        .filter(
            post__group=group,
            post__deleted_at__isnull=True,
            mime__startswith='image/',
        )
        .order_by('-created_at', '-id')
    )


def profile_photos(profile_user):
    return (
        PostAttachment.objects
        .filter(
            post__user=profile_user,
            post__group__isnull=True,
            post__deleted_at__isnull=True,
            mime__startswith='image/',
        )
        .order_by('-created_at', '-id')
    )
