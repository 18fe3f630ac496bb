from django.conf import settings


def pytest_configure():
    if not settings.configured:
        settings.configure(
            INSTALLED_APPS=[],
            MIDDLEWARE=[
                "auth_session_sdk.contrib.django.SessionMiddleware",
            ],
            SECRET_KEY="test_secret",
            ALLOWED_HOSTS=["testserver"],
        )
        import django

        django.setup()
