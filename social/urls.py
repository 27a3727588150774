"""
================================================================================
SOCIALHUB - URL CONFIGURATION
================================================================================

URL STRUCTURE OVERVIEW
================================================================================
1. Feeds & Profiles (/, u/<username>, follow)
2. Posts (create, view, edit, delete, download, react, pin, link preview)
3. Comments (create under a post, edit, delete, react)
4. Groups (create, profile, settings, invitations, membership workflow)
5. Notifications (list, mark read, delete)

NAMING CONVENTIONS
================================================================================
URL names use underscore_case: <resource>_<action> or <action>_<resource>
(e.g. 'post_reaction', 'delete_comment'). Toggles are prefixed 'toggle_'.

Every view answers JSON. Paginated feeds accept ``?page=N`` and then return
only the posts page.
"""

from django.urls import path

from . import views

urlpatterns = [

    # ========================================================================
    # SECTION 1: FEEDS & PROFILES
    # ========================================================================

    path("", views.home, name="home"),
    path("u/<str:username>/", views.profile, name="profile"),
    path("u/<str:username>/follow/", views.toggle_follow, name="toggle_follow"),

    # ========================================================================
    # SECTION 2: POSTS
    # ========================================================================

    path("post/", views.create_post, name="create_post"),
    path("post/fetch-url-preview/", views.fetch_url_preview, name="fetch_url_preview"),
    path("post/download/<int:attachment_id>/", views.download_attachment, name="download_attachment"),
    path("post/<int:post_id>/", views.post_view, name="post_view"),
    path("post/<int:post_id>/edit/", views.update_post, name="update_post"),
    path("post/<int:post_id>/delete/", views.delete_post, name="delete_post"),
    path("post/<int:post_id>/reaction/", views.post_reaction, name="post_reaction"),
    path("post/<int:post_id>/pin/", views.pin_post, name="pin_post"),

    # ========================================================================
    # SECTION 3: COMMENTS
    # ========================================================================

    path("post/<int:post_id>/comment/", views.create_comment, name="create_comment"),
    path("comment/<int:comment_id>/edit/", views.update_comment, name="update_comment"),
    path("comment/<int:comment_id>/delete/", views.delete_comment, name="delete_comment"),
    path("comment/<int:comment_id>/reaction/", views.comment_reaction, name="comment_reaction"),

    # ========================================================================
    # SECTION 4: GROUPS
    # ========================================================================

    path("group/", views.create_group, name="create_group"),
    path(
        "group/approve-invitation/<str:token>/",
        views.accept_invitation,
        name="group_accept_invitation"
    ),  # Link sent in the invitation notification
    path("g/<slug:slug>/", views.group_profile, name="group_profile"),
    path("group/<slug:slug>/update/", views.update_group, name="update_group"),
    path("group/<slug:slug>/update-images/", views.update_group_images, name="update_group_images"),
    path("group/<slug:slug>/invite/", views.invite_user, name="group_invite"),
    path("group/<slug:slug>/join/", views.join_group, name="group_join"),
    path("group/<slug:slug>/approve-request/", views.approve_request, name="group_approve_request"),
    path("group/<slug:slug>/change-role/", views.change_role, name="group_change_role"),
    path("group/<slug:slug>/remove-user/", views.remove_user, name="group_remove_user"),

    # ========================================================================
    # SECTION 5: NOTIFICATIONS
    # ========================================================================

    path("notifications/", views.notifications_view, name="notifications"),
    path("notifications/mark-read/", views.mark_notifications_read, name="mark_notifications_read"),
    path(
        "notifications/<int:notification_id>/delete/",
        views.delete_notification,
        name="delete_notification"
    ),
]
