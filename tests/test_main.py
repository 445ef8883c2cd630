from fastapi import FastAPI

from contact_relay.main import app


def test_module_level_app_is_built_from_environment():
    assert isinstance(app, FastAPI)
    assert app.state.settings.RESEND_API_KEY.startswith("re_")
    paths = {route.path for route in app.routes}
    assert {"/contact", "/health"} <= paths
