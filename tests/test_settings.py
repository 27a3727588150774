from django.conf import settings


def test_app_defaults():
    assert settings.TIMELINE_PAGE_SIZE == 10
    assert settings.GROUP_INVITATION_TTL_HOURS == 24
    assert 'png' in settings.ATTACHMENT_ALLOWED_EXTENSIONS


def test_no_outgoing_mail_configuration():
    for name in ('EMAIL_HOST', 'EMAIL_HOST_USER', 'EMAIL_HOST_PASSWORD', 'DEFAULT_FROM_EMAIL'):
        assert not settings.is_overridden(name), name
