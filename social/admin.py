from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.models import Group as AuthGroup
from django.urls import reverse
from django.utils import timezone
from django.utils.html import format_html

from .models import (
    Comment, Follower, Group, GroupUser, Notification, Post, PostAttachment,
    Reaction, User,
)

# ==================== ADMIN CLASSES ====================

@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('username', 'name', 'email', 'is_staff', 'date_joined')
    search_fields = ('username', 'name', 'email')
    fieldsets = BaseUserAdmin.fieldsets + (
        ('Profile', {'fields': ('name', 'avatar', 'cover', 'timezone', 'pinned_post')}),
    )
    raw_id_fields = ('pinned_post',)
    actions = ['activate_users', 'deactivate_users']

    def activate_users(self, request, queryset):
        updated = queryset.update(is_active=True)
        self.message_user(request, f"{updated} users activated")
    activate_users.short_description = "Activate selected users"

    def deactivate_users(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f"{updated} users deactivated")
    deactivate_users.short_description = "Deactivate selected users"


class GroupUserInline(admin.TabularInline):
    model = GroupUser
    fk_name = 'group'
    extra = 0
    raw_id_fields = ('user', 'created_by')
    fields = ('user', 'status', 'role', 'token_expire_date', 'token_used')


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'slug', 'owner_link', 'auto_approval', 'member_count', 'deleted_at')
    list_filter = ('auto_approval', 'deleted_at')
    search_fields = ('name', 'slug', 'user__username')
    raw_id_fields = ('user', 'pinned_post')
    inlines = [GroupUserInline]
    actions = ['restore_groups']

    def get_queryset(self, request):
        return Group.all_objects.select_related('user')

    def owner_link(self, obj):
        url = reverse("admin:social_user_change", args=[obj.user_id])
        return format_html('<a href="{}">{}</a>', url, obj.user.username)
    owner_link.short_description = 'Owner'
    owner_link.admin_order_field = 'user__username'

    def member_count(self, obj):
        return obj.memberships.filter(status='approved').count()
    member_count.short_description = 'Members'

    def restore_groups(self, request, queryset):
        updated = queryset.update(deleted_at=None, updated_at=timezone.now())
        self.message_user(request, f"{updated} groups restored")
    restore_groups.short_description = "Restore selected groups"


@admin.register(GroupUser)
class GroupUserAdmin(admin.ModelAdmin):
    list_display = ('id', 'group', 'user', 'status', 'role', 'created_at')
    list_filter = ('status', 'role')
    search_fields = ('group__name', 'user__username')
    raw_id_fields = ('group', 'user', 'created_by')


class PostAttachmentInline(admin.TabularInline):
    model = PostAttachment
    extra = 0
    fields = ('name', 'file', 'mime', 'size')
    readonly_fields = ('mime', 'size')


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ('id', 'user_link', 'group', 'created_at', 'body_short', 'is_deleted')
    list_filter = ('created_at', 'deleted_at')
    search_fields = ('body', 'user__username', 'group__name')
    raw_id_fields = ('user', 'group', 'deleted_by')
    inlines = [PostAttachmentInline]
    actions = ['restore_posts']

    def get_queryset(self, request):
        return Post.all_objects.select_related('user', 'group')

    def user_link(self, obj):
        url = reverse("admin:social_user_change", args=[obj.user_id])
        return format_html('<a href="{}">{}</a>', url, obj.user.username)
    user_link.short_description = 'User'
    user_link.admin_order_field = 'user__username'

    def body_short(self, obj):
        if obj.body:
            return obj.body[:80] + '...' if len(obj.body) > 80 else obj.body
        return "(attachments only)"
    body_short.short_description = 'Body'

    @admin.display(boolean=True, description='Deleted')
    def is_deleted(self, obj):
        return obj.deleted_at is not None

    def restore_posts(self, request, queryset):
        updated = queryset.update(deleted_at=None, deleted_by=None, updated_at=timezone.now())
        self.message_user(request, f"{updated} posts restored")
    restore_posts.short_description = "Restore selected posts"


@admin.register(PostAttachment)
class PostAttachmentAdmin(admin.ModelAdmin):
    list_display = ('id', 'name', 'post', 'mime', 'size', 'created_at')
    search_fields = ('name',)
    raw_id_fields = ('post', 'created_by')


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'post', 'parent', 'created_at', 'comment_short')
    search_fields = ('comment', 'user__username')
    raw_id_fields = ('post', 'user', 'parent')

    def comment_short(self, obj):
        return obj.comment[:50] + '...' if len(obj.comment) > 50 else obj.comment
    comment_short.short_description = 'Comment'


@admin.register(Reaction)
class ReactionAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'type', 'content_type', 'object_id', 'created_at')
    list_filter = ('type', 'content_type')
    search_fields = ('user__username',)


@admin.register(Follower)
class FollowerAdmin(admin.ModelAdmin):
    list_display = ('id', 'follower', 'user', 'created_at')
    search_fields = ('follower__username', 'user__username')


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'actor', 'verb', 'created_at', 'is_read')
    list_filter = ('is_read', 'verb', 'created_at')
    search_fields = ('user__username', 'actor__username', 'verb')


# ==================== ADMIN SITE CUSTOMIZATION ====================

admin.site.unregister(AuthGroup)

admin.site.site_header = "SocialHub Administration"
admin.site.site_title = "SocialHub Admin Portal"
admin.site.index_title = "Welcome to SocialHub Admin"
