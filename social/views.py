import json
import logging
from datetime import timedelta

from django.conf import settings
from django.contrib.auth.decorators import login_required
from django.contrib.contenttypes.models import ContentType
from django.core.exceptions import BadRequest
from django.db import transaction
from django.db.models import Q
from django.http import FileResponse, Http404, JsonResponse
from django.shortcuts import get_object_or_404
from django.template.defaultfilters import linebreaksbr
from django.utils import timezone
from django.utils.crypto import get_random_string
from django.views.decorators.http import require_GET, require_http_methods, require_POST

from . import notifications
from .attachments import discard_files, store_attachments, validate_attachments
from .comment_tree import subtree_ids
from .exceptions import AttachmentValidationError
from .link_preview import fetch_preview
from .models import (
    Comment, Follower, Group, GroupUser, GroupUserRole, GroupUserStatus,
    Notification, Post, PostAttachment, Reaction, ReactionType, User,
)
from .resources import (
    group_resource, group_user_resource, notification_resource, paginated_resource,
    post_resource, user_resource, attachment_resource, comment_resource,
)
from .timeline import (
    group_photos, group_timeline, home_timeline, load_comment_node, load_post,
    paginate, profile_photos, profile_timeline, visible_posts,
)


# Logger
logger = logging.getLogger(__name__)

TRUE_VALUES = ('1', 'true', 'on', 'yes')

REQUEST_ACTIONS = {'approve': 'approved', 'reject': 'rejected'}


# ============================================================================
# REQUEST HELPERS
# ============================================================================

def _request_data(request):
    """Form data, or the decoded body for ``application/json`` requests."""
    if request.content_type == 'application/json':
        try:
            data = json.loads(request.body or b'{}')
        except json.JSONDecodeError:
            raise BadRequest("Invalid JSON body")
        if not isinstance(data, dict):
            raise BadRequest("JSON body must be an object")
        return data
    return request.POST


def _text(data, key):
    """Stripped string value of ``key``; a non-string JSON value is a bad request."""
    value = data.get(key)
    if value is None:
        return ''
    if not isinstance(value, str):
        raise BadRequest(f"{key} must be a string")
    return value.strip()


def _getlist(data, key):
    if hasattr(data, 'getlist'):
        return data.getlist(key)
    value = data.get(key) or []
    return value if isinstance(value, list) else [value]


def _as_bool(value, default=False):
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in TRUE_VALUES


def _as_int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _posts_only(request):
    """Infinite scroll asks for further pages and only needs the posts."""
    return 'page' in request.GET


def _visible_comments():
    return Comment.objects.filter(
        Q(post__group__isnull=True) | Q(post__group__deleted_at__isnull=True),
        post__deleted_at__isnull=True,
    )


def _can_view_post(post, user):
    return not post.group_id or post.group.has_approved_user(user.id)


def _forbidden(message):
    return JsonResponse({"error": message}, status=403)


def _toggle_reaction(target, user, reaction_type):
    """Add the user's reaction or take it back; return (has_reaction, count)."""
    content_type = ContentType.objects.get_for_model(target)
    reactions = Reaction.objects.filter(content_type=content_type, object_id=target.pk)

    existing = reactions.filter(user=user).first()
    if existing:
        existing.delete()
        has_reaction = False
    else:
        Reaction.objects.create(
            content_type=content_type,
            object_id=target.pk,
            user=user,
            type=reaction_type,
        )
        has_reaction = True

    return has_reaction, reactions.count()


# ============================================================================
# FEEDS & PROFILES
# ============================================================================

@login_required
@require_GET
def home(request):
    page = paginate(home_timeline(request.user), request.GET.get('page'))
    posts = paginated_resource(page, lambda post: post_resource(post, request.user.id))
    if _posts_only(request):
        return JsonResponse(posts)

    memberships = (
        GroupUser.objects
        .filter(user=request.user, group__deleted_at__isnull=True)
        .select_related('group')
        .order_by('group__name')
    )
    return JsonResponse({
        'posts': posts,
        'groups': [group_resource(m.group, membership=m) for m in memberships],
    })


@login_required
@require_GET
def profile(request, username):
    profile_user = get_object_or_404(User, username=username)

    page = paginate(profile_timeline(profile_user, request.user), request.GET.get('page'))
    posts = paginated_resource(page, lambda post: post_resource(post, request.user.id))
    if _posts_only(request):
        return JsonResponse(posts)

    followers = User.objects.filter(followings__user=profile_user).order_by('username')
    followings = User.objects.filter(followers__follower=profile_user).order_by('username')

    return JsonResponse({
        'user': user_resource(profile_user),
        'is_current_user_follower': Follower.objects.filter(
            user=profile_user, follower=request.user
        ).exists(),
        'followers_count': followers.count(),
        'followings_count': followings.count(),
        'posts': posts,
        'followers': [user_resource(u) for u in followers],
        'followings': [user_resource(u) for u in followings],
        'photos': [attachment_resource(a) for a in profile_photos(profile_user)],
    })


@login_required
@require_POST
def toggle_follow(request, username):
    target_user = get_object_or_404(User, username=username)

    if request.user == target_user:
        return JsonResponse({"error": "Cannot follow yourself"}, status=400)

    follow, created = Follower.objects.get_or_create(
        user=target_user,
        follower=request.user,
    )
    if not created:
        follow.delete()
        action = "unfollowed"
    else:
        action = "followed"
        notifications.followed(target_user, request.user)

    return JsonResponse({
        "action": action,
        "followers_count": target_user.followers.count(),
    })


# ============================================================================
# POSTS
# ============================================================================

@login_required
@require_GET
def post_view(request, post_id):
    post = get_object_or_404(visible_posts(), pk=post_id)
    if not _can_view_post(post, request.user):
        return _forbidden("You don't have permission to view that post")

    post = load_post(post.id, request.user.id)
    return JsonResponse({'post': post_resource(post, request.user.id)})


def _preview_from(data):
    """(preview, preview_url) from submitted data, fetching when only a URL came."""
    preview_url = _text(data, 'preview_url') or None
    preview = data.get('preview')
    if isinstance(preview, str):
        try:
            preview = json.loads(preview) if preview.strip() else None
        except json.JSONDecodeError:
            raise BadRequest("Invalid preview")
    if preview_url and preview is None:
        preview = fetch_preview(preview_url) or None
    return preview, preview_url


@login_required
@require_POST
def create_post(request):
    user = request.user
    data = _request_data(request)
    body = _text(data, 'body')
    files = request.FILES.getlist('attachments')

    if not body and not files:
        return JsonResponse({"error": "Post body or attachments required"}, status=400)

    group = None
    if data.get('group_id'):
        group_id = _as_int(data.get('group_id'))
        if group_id is None:
            return JsonResponse({"error": "Invalid group"}, status=400)
        group = get_object_or_404(Group, pk=group_id)
        if not group.has_approved_user(user.id):
            return _forbidden("You don't have permission to post in this group")

    try:
        validate_attachments(files)
    except AttachmentValidationError as e:
        return JsonResponse({"errors": {e.field: e.message}}, status=400)

    preview, preview_url = _preview_from(data)

    stored_paths = []
    try:
        with transaction.atomic():
            post = Post.objects.create(
                user=user,
                group=group,
                body=body,
                preview=preview,
                preview_url=preview_url,
            )
            store_attachments(post, files, user, stored_paths)
    except Exception:
        discard_files(stored_paths)
        raise

    notifications.post_created(post, user)
    logger.info(f"Post {post.id} created by {user.username}")

    post = load_post(post.id, user.id)
    return JsonResponse(post_resource(post, user.id), status=201)


@login_required
@require_POST
def update_post(request, post_id):
    user = request.user
    post = get_object_or_404(visible_posts(), pk=post_id)
    if not post.is_owner(user.id):
        return _forbidden("You don't have permission to update this post")

    data = _request_data(request)
    files = request.FILES.getlist('attachments')
    deleted_ids = [i for i in (_as_int(v) for v in _getlist(data, 'deleted_file_ids')) if i is not None]

    kept = post.attachments.exclude(id__in=deleted_ids)
    try:
        validate_attachments(files, existing_size=sum(a.size for a in kept))
    except AttachmentValidationError as e:
        return JsonResponse({"errors": {e.field: e.message}}, status=400)

    if 'body' in data:
        post.body = _text(data, 'body')
    if 'preview_url' in data or 'preview' in data:
        post.preview, post.preview_url = _preview_from(data)

    stored_paths = []
    try:
        with transaction.atomic():
            post.save()
            removed = post.attachments.filter(id__in=deleted_ids)
            removed_paths = [a.file.name for a in removed if a.file]
            removed.delete()
            store_attachments(post, files, user, stored_paths)
            # Rolled back rows must still find their files.
            transaction.on_commit(lambda: discard_files(removed_paths))
    except Exception:
        discard_files(stored_paths)
        raise

    post = load_post(post.id, user.id)
    return JsonResponse(post_resource(post, user.id))


@login_required
@require_http_methods(["POST", "DELETE"])
def delete_post(request, post_id):
    user = request.user
    post = get_object_or_404(visible_posts(), pk=post_id)

    is_group_admin = post.group_id and post.group.is_admin(user.id)
    if not (post.is_owner(user.id) or is_group_admin):
        return _forbidden("You don't have permission to delete this post")

    post.soft_delete(deleted_by=user)
    if not post.is_owner(user.id):
        notifications.post_deleted(post, user)
        logger.info(f"Post {post.id} deleted by group admin {user.username}")

    return JsonResponse({"message": "Post deleted"})


@login_required
@require_GET
def download_attachment(request, attachment_id):
    attachment = get_object_or_404(PostAttachment.objects.select_related('post'), pk=attachment_id)
    post = attachment.post
    if post.deleted_at is not None or (post.group_id and post.group.deleted_at is not None):
        raise Http404("Attachment not found")
    if not _can_view_post(post, request.user):
        return _forbidden("You don't have permission to download that attachment")

    return FileResponse(attachment.file.open('rb'), as_attachment=True, filename=attachment.name)


@login_required
@require_POST
def post_reaction(request, post_id):
    post = get_object_or_404(visible_posts(), pk=post_id)
    if not _can_view_post(post, request.user):
        return _forbidden("You don't have permission to react to that post")

    data = _request_data(request)
    reaction_type = data.get('reaction') or ReactionType.LIKE
    if reaction_type not in ReactionType.values:
        return JsonResponse({"error": "Invalid reaction"}, status=400)

    has_reaction, count = _toggle_reaction(post, request.user, reaction_type)
    if has_reaction and not post.is_owner(request.user.id):
        notifications.post_reaction_added(post, request.user)

    return JsonResponse({
        'num_of_reactions': count,
        'current_user_has_reaction': has_reaction,
    })


@login_required
@require_POST
def pin_post(request, post_id):
    """
    Pin or unpin a post on the author's profile or, with ``for_group``,
    on top of its group. Pinning the pinned post unpins it.
    """
    user = request.user
    post = get_object_or_404(visible_posts(), pk=post_id)
    data = _request_data(request)
    for_group = _as_bool(data.get('for_group'))

    if for_group:
        group = post.group
        if group is None:
            return JsonResponse({"error": "Invalid request"}, status=400)
        if not group.is_admin(user.id):
            return _forbidden("You don't have permission to perform this action")
        target = group
    else:
        if not post.is_owner(user.id):
            return _forbidden("You can only pin your own posts")
        if post.group_id:
            return JsonResponse({"error": "Group posts can only be pinned in their group"}, status=400)
        target = user

    pinned = target.pinned_post_id != post.id
    target.pinned_post = post if pinned else None
    target.save(update_fields=['pinned_post'])

    return JsonResponse({
        "success": f"Post was successfully {'pinned' if pinned else 'unpinned'}",
        "pinned": pinned,
    })


@login_required
@require_POST
def fetch_url_preview(request):
    data = _request_data(request)
    url = _text(data, 'url')
    if not url:
        return JsonResponse({"error": "URL required"}, status=400)
    return JsonResponse(fetch_preview(url))


# ============================================================================
# COMMENTS
# ============================================================================

@login_required
@require_POST
def create_comment(request, post_id):
    post = get_object_or_404(visible_posts(), pk=post_id)
    if not _can_view_post(post, request.user):
        return _forbidden("You don't have permission to comment on that post")

    data = _request_data(request)
    text = _text(data, 'comment')
    if not text:
        return JsonResponse({"error": "Comment cannot be empty"}, status=400)

    parent = None
    if data.get('parent_id'):
        parent = Comment.objects.filter(pk=_as_int(data.get('parent_id')), post=post).first()
        if parent is None:
            return JsonResponse({"error": "Invalid parent comment"}, status=400)

    comment = Comment.objects.create(
        post=post,
        user=request.user,
        parent=parent,
        comment=str(linebreaksbr(text, autoescape=True)),
    )
    notifications.comment_created(comment, post)

    node = load_comment_node(comment.id, request.user.id)
    return JsonResponse(comment_resource(node, request.user.id), status=201)


@login_required
@require_http_methods(["POST", "PUT"])
def update_comment(request, comment_id):
    comment = get_object_or_404(_visible_comments(), pk=comment_id)
    if not comment.is_owner(request.user.id):
        return _forbidden("You don't have permission to update this comment")

    data = _request_data(request)
    text = _text(data, 'comment')
    if not text:
        return JsonResponse({"error": "Comment cannot be empty"}, status=400)

    comment.comment = str(linebreaksbr(text, autoescape=True))
    comment.save(update_fields=['comment', 'updated_at'])

    node = load_comment_node(comment.id, request.user.id)
    return JsonResponse(comment_resource(node, request.user.id))


@login_required
@require_http_methods(["POST", "DELETE"])
def delete_comment(request, comment_id):
    """
    Delete a comment with all of its replies.

    Allowed for the comment owner, the post owner and admins of the
    post's group. Responds with how many comments were removed.
    """
    user = request.user
    comment = get_object_or_404(
        _visible_comments().select_related('post', 'user'),
        pk=comment_id,
    )
    post = comment.post

    allowed = (
        comment.is_owner(user.id)
        or post.is_owner(user.id)
        or (post.group_id and post.group.is_admin(user.id))
    )
    if not allowed:
        return _forbidden("You don't have permission to delete this comment.")

    edges = Comment.objects.filter(post_id=post.id).values_list('id', 'parent_id')
    deleted_count = len(subtree_ids(comment.id, edges))

    comment.delete()
    if not comment.is_owner(user.id):
        notifications.comment_deleted(comment, post, user)

    return JsonResponse({"deleted": deleted_count})


@login_required
@require_POST
def comment_reaction(request, comment_id):
    comment = get_object_or_404(
        _visible_comments().select_related('post'),
        pk=comment_id,
    )
    if not _can_view_post(comment.post, request.user):
        return _forbidden("You don't have permission to react to that comment")

    data = _request_data(request)
    reaction_type = data.get('reaction') or ReactionType.LIKE
    if reaction_type not in ReactionType.values:
        return JsonResponse({"error": "Invalid reaction"}, status=400)

    has_reaction, count = _toggle_reaction(comment, request.user, reaction_type)
    if has_reaction and not comment.is_owner(request.user.id):
        notifications.comment_reaction_added(comment, request.user)

    return JsonResponse({
        'num_of_reactions': count,
        'current_user_has_reaction': has_reaction,
    })


# ============================================================================
# GROUPS
# ============================================================================

def _admin_group_or_403(request, slug):
    """(group, None) for admins, (group, 403 response) for everyone else."""
    group = get_object_or_404(Group, slug=slug)
    if not group.is_admin(request.user.id):
        return group, _forbidden("You don't have permission to perform this action")
    return group, None


@login_required
@require_POST
def create_group(request):
    user = request.user
    data = _request_data(request)
    name = _text(data, 'name')
    if not name:
        return JsonResponse({"errors": {"name": "Name is required"}}, status=400)
    if len(name) > 255:
        return JsonResponse({"errors": {"name": "Name cannot exceed 255 characters"}}, status=400)

    with transaction.atomic():
        group = Group.objects.create(
            name=name,
            about=_text(data, 'about'),
            auto_approval=_as_bool(data.get('auto_approval'), default=True),
            user=user,
        )
        membership = GroupUser.objects.create(
            group=group,
            user=user,
            status=GroupUserStatus.APPROVED,
            role=GroupUserRole.ADMIN,
            created_by=user,
        )

    logger.info(f"Group {group.slug} created by {user.username}")
    return JsonResponse(group_resource(group, membership=membership), status=201)


@login_required
@require_GET
def group_profile(request, slug):
    user = request.user
    group = get_object_or_404(Group, slug=slug)
    membership = group.membership_for(user.id)

    if membership is None or not membership.is_approved:
        return JsonResponse({
            'group': group_resource(group, membership=membership),
            'posts': None,
            'users': [],
            'requests': [],
            'photos': [],
        })

    page = paginate(group_timeline(group, user), request.GET.get('page'))
    posts = paginated_resource(page, lambda post: post_resource(post, user.id))
    if _posts_only(request):
        return JsonResponse(posts)

    members = (
        GroupUser.objects
        .filter(group=group)
        .select_related('user')
        .order_by('user__name', 'user__username')
    )
    requests = (
        GroupUser.objects
        .filter(group=group, status=GroupUserStatus.PENDING, token__isnull=True)
        .select_related('user')
        .order_by('user__name', 'user__username')
    )

    return JsonResponse({
        'group': group_resource(group, membership=membership),
        'posts': posts,
        'users': [group_user_resource(m) for m in members],
        'requests': [user_resource(m.user) for m in requests],
        'photos': [attachment_resource(a) for a in group_photos(group)],
    })


@login_required
@require_POST
def update_group(request, slug):
    group, denied = _admin_group_or_403(request, slug)
    if denied:
        return denied

    data = _request_data(request)
    if 'name' in data:
        name = _text(data, 'name')
        if not name:
            return JsonResponse({"errors": {"name": "Name is required"}}, status=400)
        group.name = name
    if 'about' in data:
        group.about = _text(data, 'about')
    if 'auto_approval' in data:
        group.auto_approval = _as_bool(data.get('auto_approval'))
    group.save()

    return JsonResponse({
        'success': "Group was updated",
        'group': group_resource(group, request.user.id),
    })


@login_required
@require_POST
def update_group_images(request, slug):
    group, denied = _admin_group_or_403(request, slug)
    if denied:
        return denied

    success = ''
    for field, label in (('cover', 'cover'), ('thumbnail', 'thumbnail')):
        upload = request.FILES.get(field)
        if upload is None:
            continue
        if not (upload.content_type or '').startswith('image/'):
            return JsonResponse({"errors": {field: "The file must be an image"}}, status=400)
        image = getattr(group, field)
        if image:
            image.delete(save=False)
        image.save(upload.name, upload, save=True)
        success = f"Your {label} image was updated"

    return JsonResponse({
        'success': success,
        'group': group_resource(group, request.user.id),
    })


@login_required
@require_POST
def invite_user(request, slug):
    group, denied = _admin_group_or_403(request, slug)
    if denied:
        return denied

    data = _request_data(request)
    identifier = _text(data, 'email')
    invitee = None
    if identifier:
        invitee = User.objects.filter(Q(username=identifier) | Q(email__iexact=identifier)).first()
    if invitee is None:
        return JsonResponse({"errors": {"email": "User not found"}}, status=400)

    membership = group.membership_for(invitee.id)
    if membership and membership.is_approved:
        return JsonResponse({"errors": {"email": "User is already joined to the group"}}, status=400)

    if membership is None:
        membership = GroupUser(group=group, user=invitee)
    membership.status = GroupUserStatus.PENDING
    membership.role = GroupUserRole.USER
    membership.token = get_random_string(64)
    membership.token_expire_date = timezone.now() + timedelta(hours=settings.GROUP_INVITATION_TTL_HOURS)
    membership.token_used = None
    membership.created_by = request.user
    membership.save()

    notifications.group_invitation(group, membership, request.user)
    logger.info(f"{invitee.username} invited to {group.slug} by {request.user.username}")

    return JsonResponse({'success': "User was invited to join the group"})


@login_required
@require_http_methods(["GET", "POST"])
def accept_invitation(request, token):
    membership = GroupUser.objects.filter(token=token).select_related('group', 'user').first()

    error = ''
    if membership is None or membership.group.deleted_at is not None:
        error = 'The link is not valid'
    elif membership.token_used or membership.is_approved:
        error = 'The link is already used'
    elif not membership.invitation_is_valid():
        error = 'The link is expired'
    if error:
        return JsonResponse({"error": error}, status=400)

    if membership.user_id != request.user.id:
        return _forbidden("This invitation belongs to another user")

    membership.status = GroupUserStatus.APPROVED
    membership.token_used = timezone.now()
    membership.save(update_fields=['status', 'token_used'])

    group = membership.group
    notifications.group_invitation_accepted(group, request.user)

    return JsonResponse({
        'success': f'You accepted to join to group "{group.name}"',
        'group': group_resource(group, membership=membership),
    })


@login_required
@require_POST
def join_group(request, slug):
    user = request.user
    group = get_object_or_404(Group, slug=slug)

    membership = group.membership_for(user.id)
    if membership and membership.is_approved:
        return JsonResponse({"error": "You are already a member of this group"}, status=400)

    if membership is None:
        membership = GroupUser(group=group, user=user, role=GroupUserRole.USER, created_by=user)

    if group.auto_approval:
        membership.status = GroupUserStatus.APPROVED
        membership.token = None
        success = f'You have joined to group "{group.name}"'
        membership.save()
    else:
        membership.status = GroupUserStatus.PENDING
        membership.token = None
        membership.token_expire_date = None
        membership.save()
        notifications.group_join_requested(group, user)
        success = "Your request has been accepted. You will be notified once you will be approved"

    return JsonResponse({
        'success': success,
        'group': group_resource(group, membership=membership),
    })


@login_required
@require_POST
def approve_request(request, slug):
    group, denied = _admin_group_or_403(request, slug)
    if denied:
        return denied

    data = _request_data(request)
    action = data.get('action')
    if action not in ('approve', 'reject'):
        return JsonResponse({"error": "Action must be approve or reject"}, status=400)

    membership = get_object_or_404(
        GroupUser.objects.select_related('user'),
        group=group,
        user_id=_as_int(data.get('user_id')),
        status=GroupUserStatus.PENDING,
        token__isnull=True,
    )
    requester = membership.user

    if action == 'approve':
        membership.status = GroupUserStatus.APPROVED
        membership.save(update_fields=['status'])
        notifications.group_request_approved(group, requester, request.user)
    else:
        membership.delete()
        notifications.group_request_rejected(group, requester, request.user)

    logger.info(f"Join request of {requester.username} to {group.slug}: {action}")
    return JsonResponse({
        'success': f'User "{requester.display_name}" was {REQUEST_ACTIONS[action]}',
    })


@login_required
@require_POST
def change_role(request, slug):
    group, denied = _admin_group_or_403(request, slug)
    if denied:
        return denied

    data = _request_data(request)
    user_id = _as_int(data.get('user_id'))
    role = data.get('role')
    if role not in GroupUserRole.values:
        return JsonResponse({"errors": {"role": "Invalid role"}}, status=400)
    if group.is_owner(user_id):
        return _forbidden("You can't change role of the owner of the group")

    membership = get_object_or_404(
        GroupUser.objects.select_related('user'),
        group=group,
        user_id=user_id,
        status=GroupUserStatus.APPROVED,
    )
    membership.role = role
    membership.save(update_fields=['role'])
    notifications.group_role_changed(group, membership.user, role, request.user)

    return JsonResponse(group_user_resource(membership))


@login_required
@require_POST
def remove_user(request, slug):
    group, denied = _admin_group_or_403(request, slug)
    if denied:
        return denied

    data = _request_data(request)
    user_id = _as_int(data.get('user_id'))
    if group.is_owner(user_id):
        return JsonResponse({"error": "The owner of the group cannot be removed"}, status=400)

    membership = get_object_or_404(GroupUser.objects.select_related('user'), group=group, user_id=user_id)
    removed = membership.user
    membership.delete()
    notifications.group_user_removed(group, removed, request.user)
    logger.info(f"{removed.username} removed from {group.slug} by {request.user.username}")

    return JsonResponse({'success': f'User "{removed.display_name}" was removed from the group'})


# ============================================================================
# NOTIFICATIONS
# ============================================================================

@login_required
@require_GET
def notifications_view(request):
    items = (
        request.user.notifications
        .select_related('actor')
        [:settings.NOTIFICATIONS_PAGE_SIZE]
    )
    return JsonResponse({
        'notifications': [notification_resource(n) for n in items],
        'unread_count': request.user.notifications.filter(is_read=False).count(),
    })


@login_required
@require_POST
def mark_notifications_read(request):
    updated = Notification.objects.filter(user=request.user, is_read=False).update(is_read=True)
    return JsonResponse({'success': True, 'updated': updated})


@login_required
@require_POST
def delete_notification(request, notification_id):
    notification = get_object_or_404(Notification, pk=notification_id, user=request.user)
    notification.delete()
    return JsonResponse({'success': True, 'message': 'Notification deleted.'})
