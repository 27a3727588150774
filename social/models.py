"""
================================================================================
SOCIALHUB - DATABASE MODELS
================================================================================

@file        models.py
@description Django ORM models defining the complete database schema

MODULE PURPOSE
================================================================================
This module defines all database models of the social network:
- User model (extended from AbstractUser)
- Groups and group memberships (roles, approval, invitations)
- Posts and their attachments
- Comments with nested replies
- Reactions (shared by posts and comments)
- Follower relationships
- Notifications

DATABASE STRUCTURE
================================================================================
1. User & Social Graph
   - User (AbstractUser extension)
   - Follower (user <- follower)

2. Groups
   - Group (soft deletable, optional pinned post)
   - GroupUser (membership: status + role + invitation token)

3. Content Models
   - Post (soft deletable, optional group, link preview)
   - PostAttachment (uploaded files)
   - Comment (post comments with nesting)
   - Reaction (generic target: Post or Comment)

4. Notifications
   - Notification (in-app activity alerts)

MODEL RELATIONSHIPS
================================================================================
User (1) ──────> (N) Post
User (1) ──────> (N) Comment
User (1) ──────> (N) Reaction
User (1) ──────> (N) Notification
User (N) <─────> (N) User       (Follower)
User (N) <─────> (N) Group      (GroupUser)

Group (1) ─────> (N) Post
Post (1) ──────> (N) PostAttachment
Post (1) ──────> (N) Comment
Comment (1) ───> (N) Comment    (nested replies)
Post|Comment (1) ─> (N) Reaction

SOFT DELETES
================================================================================
Post and Group carry a ``deleted_at`` timestamp. Their default manager
(``objects``) hides soft-deleted rows; ``all_objects`` sees everything.
Forward foreign key access (``comment.post``) uses the base manager and
still resolves soft-deleted rows.
"""

import pytz
from django.conf import settings
from django.contrib.auth.models import AbstractUser
from django.contrib.contenttypes.fields import GenericForeignKey, GenericRelation
from django.contrib.contenttypes.models import ContentType
from django.db import models
from django.utils import timezone
from django.utils.text import slugify

# ============================================================================
# CONSTANTS & CHOICES
# ============================================================================

TIMEZONE_CHOICES = [(tz, tz) for tz in pytz.all_timezones]


class GroupUserStatus(models.TextChoices):
    APPROVED = 'approved', 'Approved'
    PENDING = 'pending', 'Pending'


class GroupUserRole(models.TextChoices):
    ADMIN = 'admin', 'Admin'
    USER = 'user', 'User'


class ReactionType(models.TextChoices):
    LIKE = 'like', 'Like'


def attachment_upload_to(instance, filename):
    return f"attachments/{instance.post_id}/{filename}"


def group_image_upload_to(instance, filename):
    return f"group-{instance.pk}/{filename}"


def user_image_upload_to(instance, filename):
    return f"user-{instance.pk}/{filename}"


# ============================================================================
# SECTION 1: USER & SOCIAL GRAPH
# ============================================================================

class User(AbstractUser):
    """
    Extended User model with social network features.

    Attributes:
        name (CharField): Display name (falls back to username)
        avatar (ImageField): Profile avatar
        cover (ImageField): Profile cover image
        timezone (CharField): Preferred timezone for display
        pinned_post (ForeignKey): Post pinned on the user's profile

    Related Names:
        posts: Posts authored by the user
        comments: Comments written by the user
        followers: Follower rows where this user is followed
        followings: Follower rows where this user follows someone
        group_memberships: GroupUser rows of this user
        notifications: Notifications received
    """

    name = models.CharField(
        max_length=255,
        blank=True,
        help_text="Display name shown next to posts and comments"
    )
    avatar = models.ImageField(
        upload_to=user_image_upload_to,
        null=True,
        blank=True,
        help_text="User's profile avatar image"
    )
    cover = models.ImageField(
        upload_to=user_image_upload_to,
        null=True,
        blank=True,
        help_text="User's profile cover image"
    )
    timezone = models.CharField(
        max_length=100,
        choices=TIMEZONE_CHOICES,
        default='UTC',
        help_text="User's preferred timezone for display"
    )
    pinned_post = models.ForeignKey(
        'Post',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        help_text="Post pinned at the top of the user's profile"
    )

    @property
    def display_name(self):
        return self.name or self.username

    @property
    def avatar_url(self):
        if self.avatar:
            return self.avatar.url
        return settings.DEFAULT_AVATAR_URL

    @property
    def cover_url(self):
        return self.cover.url if self.cover else None


class Follower(models.Model):
    """
    One-way follow connection: ``follower`` follows ``user``.

    Example:
        Follower.objects.create(user=author, follower=request.user)
    """

    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='followers',
        help_text="User being followed"
    )
    follower = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='followings',
        help_text="User who is following"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('user', 'follower')

    def __str__(self):
        return f"{self.follower} -> {self.user}"


# ============================================================================
# SECTION 2: GROUPS
# ============================================================================

class SoftDeleteManager(models.Manager):
    """Default manager that hides rows with a ``deleted_at`` timestamp."""

    def get_queryset(self):
        return super().get_queryset().filter(deleted_at__isnull=True)


class Group(models.Model):
    """
    A community users can join.

    Membership lives in GroupUser. The creator is the owner and always an
    approved admin. Groups with ``auto_approval`` accept join requests
    immediately; otherwise an admin has to approve them.

    Attributes:
        name (CharField): Group name
        slug (SlugField): Unique URL identifier generated from the name
        about (TextField): Description
        cover / thumbnail (ImageField): Group images
        auto_approval (BooleanField): Approve join requests automatically
        user (ForeignKey): Owner
        pinned_post (ForeignKey): Post pinned on top of the group timeline
        deleted_at (DateTimeField): Soft delete timestamp
    """

    name = models.CharField(max_length=255)
    slug = models.SlugField(
        max_length=255,
        unique=True,
        help_text="URL identifier, generated from the name"
    )
    about = models.TextField(blank=True)
    cover = models.ImageField(upload_to=group_image_upload_to, null=True, blank=True)
    thumbnail = models.ImageField(upload_to=group_image_upload_to, null=True, blank=True)
    auto_approval = models.BooleanField(
        default=True,
        help_text="Join requests are approved without an admin"
    )
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='owned_groups',
        help_text="Group owner"
    )
    pinned_post = models.ForeignKey(
        'Post',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        help_text="Post pinned at the top of the group timeline"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = SoftDeleteManager()
    all_objects = models.Manager()

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = self._unique_slug()
        super().save(*args, **kwargs)

    def _unique_slug(self):
        base = slugify(self.name)[:240] or 'group'
        slug = base
        suffix = 2
        while Group.all_objects.filter(slug=slug).exclude(pk=self.pk).exists():
            slug = f"{base}-{suffix}"
            suffix += 1
        return slug

    def membership_for(self, user_id):
        return self.memberships.filter(user_id=user_id).first()

    def is_owner(self, user_id):
        return self.user_id == user_id

    def is_admin(self, user_id):
        return self.memberships.filter(
            user_id=user_id,
            role=GroupUserRole.ADMIN,
            status=GroupUserStatus.APPROVED,
        ).exists()

    def has_approved_user(self, user_id):
        return self.memberships.filter(
            user_id=user_id,
            status=GroupUserStatus.APPROVED,
        ).exists()

    def approved_users(self):
        return User.objects.filter(
            group_memberships__group=self,
            group_memberships__status=GroupUserStatus.APPROVED,
        )

    def pending_users(self):
        return User.objects.filter(
            group_memberships__group=self,
            group_memberships__status=GroupUserStatus.PENDING,
        )

    def admin_users(self):
        return User.objects.filter(
            group_memberships__group=self,
            group_memberships__status=GroupUserStatus.APPROVED,
            group_memberships__role=GroupUserRole.ADMIN,
        )

    @property
    def cover_url(self):
        return self.cover.url if self.cover else None

    @property
    def thumbnail_url(self):
        return self.thumbnail.url if self.thumbnail else None


class GroupUser(models.Model):
    """
    Membership of a user in a group.

    A pending row is either a join request (no token) or an invitation
    (token + expiry). Accepting an invitation stamps ``token_used``.
    """

    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name='memberships')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='group_memberships')
    status = models.CharField(
        max_length=25,
        choices=GroupUserStatus.choices,
        default=GroupUserStatus.PENDING,
    )
    role = models.CharField(
        max_length=25,
        choices=GroupUserRole.choices,
        default=GroupUserRole.USER,
    )
    token = models.CharField(max_length=64, null=True, blank=True, db_index=True)
    token_expire_date = models.DateTimeField(null=True, blank=True)
    token_used = models.DateTimeField(null=True, blank=True)
    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
        help_text="User who created the membership (self or inviting admin)"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('group', 'user')

    def __str__(self):
        return f"{self.user} in {self.group} ({self.role}, {self.status})"

    @property
    def is_approved(self):
        return self.status == GroupUserStatus.APPROVED

    @property
    def is_admin(self):
        return self.is_approved and self.role == GroupUserRole.ADMIN

    def invitation_is_valid(self, now=None):
        now = now or timezone.now()
        return (
            self.token_used is None
            and self.token_expire_date is not None
            and self.token_expire_date >= now
        )


# ============================================================================
# SECTION 3: CONTENT MODELS
# ============================================================================

class Reaction(models.Model):
    """
    A user's reaction on a post or a comment.

    The target is generic (content_type + object_id) so posts and comments
    share one table. A user has at most one reaction per target; reacting
    again toggles it off.
    """

    content_type = models.ForeignKey(ContentType, on_delete=models.CASCADE)
    object_id = models.PositiveBigIntegerField()
    target = GenericForeignKey('content_type', 'object_id')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='reactions')
    type = models.CharField(
        max_length=20,
        choices=ReactionType.choices,
        default=ReactionType.LIKE,
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('content_type', 'object_id', 'user')
        indexes = [models.Index(fields=['content_type', 'object_id'], name='social_reaction_target_idx')]

    def __str__(self):
        return f"{self.user} {self.type} {self.content_type.model}#{self.object_id}"


class Post(models.Model):
    """
    User-generated post, on the author's profile or inside a group.

    Attributes:
        user (ForeignKey): Post author
        group (ForeignKey): Group the post was published in (optional)
        body (TextField): Rich text content
        preview (JSONField): Link preview metadata (og:title, og:image...)
        preview_url (URLField): URL the preview was fetched from
        deleted_at / deleted_by: Soft delete bookkeeping

    Related Names:
        attachments: PostAttachment rows
        comments: Comment rows (flat; see social.comment_tree)
        reactions: Reaction rows (generic relation)
    """

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='posts')
    group = models.ForeignKey(
        Group,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='posts',
    )
    body = models.TextField(blank=True)
    preview = models.JSONField(null=True, blank=True)
    preview_url = models.URLField(max_length=2000, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True)
    deleted_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
    )

    reactions = GenericRelation(Reaction, related_query_name='post')

    objects = SoftDeleteManager()
    all_objects = models.Manager()

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.user} - {self.body[:50]}"

    def is_owner(self, user_id):
        return self.user_id == user_id

    def soft_delete(self, deleted_by):
        self.deleted_at = timezone.now()
        self.deleted_by = deleted_by
        self.save(update_fields=['deleted_at', 'deleted_by'])


class PostAttachment(models.Model):
    """Uploaded file attached to a post. Deleting the row deletes the file."""

    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name='attachments')
    name = models.CharField(max_length=255, help_text="Original client file name")
    file = models.FileField(upload_to=attachment_upload_to, max_length=500)
    mime = models.CharField(max_length=255)
    size = models.PositiveBigIntegerField()
    created_by = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return self.name

    @property
    def is_image(self):
        return self.mime.startswith('image/')

    def delete(self, *args, **kwargs):
        if self.file:
            self.file.delete(save=False)
        return super().delete(*args, **kwargs)


class Comment(models.Model):
    """
    Comment on a post with optional nested replies.

    Comments are stored flat with a ``parent`` pointer. Deleting a comment
    cascades to its whole reply subtree. See ``social.comment_tree`` for
    turning a post's comments into a nested tree.
    """

    post = models.ForeignKey(Post, on_delete=models.CASCADE, related_name='comments')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='comments')
    parent = models.ForeignKey(
        'self',
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name='replies',
        help_text="Parent comment for nested replies"
    )
    comment = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    reactions = GenericRelation(Reaction, related_query_name='comment')

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.user}: {self.comment[:50]}"

    def is_owner(self, user_id):
        return self.user_id == user_id


# ============================================================================
# SECTION 4: NOTIFICATIONS
# ============================================================================

class Notification(models.Model):
    """
    In-app notification for activity relevant to ``user``.

    Rows are written by ``social.notifications``; delivering them by mail
    or push is left to external channels.
    """

    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='notifications')
    actor = models.ForeignKey(
        User,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
    )
    verb = models.CharField(max_length=50)
    message = models.CharField(max_length=255, blank=True)
    post = models.ForeignKey(Post, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    comment = models.ForeignKey(Comment, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    group = models.ForeignKey(Group, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    is_read = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.user}: {self.verb}"
