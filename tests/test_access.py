import pytest

from donorlink.core import access
from donorlink.core.access import AccessSignal, NavItem, SCREENS, activate_item, resolve
from donorlink.core.roles import UserRole

ROLES = list(UserRole)
ADMIN_ONLY = [key for key, screen in SCREENS.items() if screen.admin_only]
AUTH_SCREENS = [key for key, screen in SCREENS.items() if screen.requires_auth]


@pytest.mark.parametrize("role", [r for r in ROLES if r != UserRole.ADMIN])
@pytest.mark.parametrize("screen", ADMIN_ONLY)
def test_admin_only_screens_redirect_non_admins_to_their_default(role, screen):
    decision = resolve(role, True, screen)

    assert decision.redirected
    assert decision.screen == access.default_screen(role)
    assert decision.signal == AccessSignal.ROLE_FORBIDDEN


@pytest.mark.parametrize("screen", AUTH_SCREENS)
@pytest.mark.parametrize("role", ROLES + [None])
def test_unauthenticated_requests_get_auth_required(screen, role):
    decision = resolve(role, False, screen)

    assert decision.screen == "login"
    assert decision.signal == AccessSignal.AUTH_REQUIRED


def test_hospital_asking_for_admin_dashboard():
    decision = resolve(UserRole.HOSPITAL, True, "adminDashboard")

    assert decision.screen == "hospitalDashboard"
    assert decision.redirected


def test_anonymous_profile_request_goes_to_login():
    decision = resolve(None, False, "profile")

    assert decision.screen == "login"
    assert decision.signal == AccessSignal.AUTH_REQUIRED
    assert not decision.allowed


def test_admin_renders_admin_screen():
    decision = resolve(UserRole.ADMIN, True, "adminAnalytics")

    assert decision.allowed
    assert decision.screen == "adminAnalytics"
    assert decision.signal == AccessSignal.NONE


def test_role_table_blocks_donor_from_hospital_screens():
    decision = resolve(UserRole.DONOR, True, "hospitalRequests")

    assert decision.screen == "home"
    assert decision.signal == AccessSignal.ROLE_FORBIDDEN


def test_admin_may_open_every_role_dashboard():
    for screen in ("hospitalDashboard", "agentDashboard", "donations"):
        assert resolve(UserRole.ADMIN, True, screen).allowed


def test_profile_not_loaded_fails_closed():
    for screen in ("home", "profile", "adminDashboard"):
        partial = resolve(None, True, screen)
        anonymous = resolve(None, False, screen)

        assert partial == anonymous
        assert partial.screen == "login"
        assert partial.signal == AccessSignal.AUTH_REQUIRED


def test_profile_not_loaded_locks_nav_items():
    assert access.navigation_items(None, True) == access.navigation_items(None, False)

    profile = next(i for i in access.navigation_items(None, True) if i.key == "profile")
    assert profile.enabled is False
    assert activate_item(profile, None, True).signal == AccessSignal.AUTH_REQUIRED


def test_role_without_authentication_is_ignored():
    decision = resolve(UserRole.ADMIN, False, "adminDashboard")

    assert decision.signal == AccessSignal.AUTH_REQUIRED


@pytest.mark.parametrize("role,expected", [
    (UserRole.DONOR, "home"),
    (UserRole.HOSPITAL, "hospitalDashboard"),
    (UserRole.AGENT, "agentDashboard"),
    (UserRole.ADMIN, "adminDashboard"),
    (None, "login"),
])
def test_unknown_screen_falls_back_to_default(role, expected):
    decision = resolve(role, role is not None, "doesNotExist")

    assert decision.screen == expected
    assert decision.redirected
    assert decision.signal == AccessSignal.NONE


def test_public_screens_render_for_anyone():
    assert resolve(None, False, "signup").allowed
    assert resolve(UserRole.AGENT, True, "login").allowed


def test_anonymous_navigation_shows_locked_items():
    items = {item.key: item for item in access.navigation_items(None, False)}

    assert set(items) == {"home", "donorSearch", "hospitals", "profile", "messages"}
    assert items["profile"].enabled is False
    assert items["messages"].enabled is False
    assert items["home"].enabled is True


def test_locked_item_signals_auth_required():
    profile = next(i for i in access.navigation_items(None, False) if i.key == "profile")

    decision = activate_item(profile, None, False)

    assert decision.screen == "login"
    assert decision.signal == AccessSignal.AUTH_REQUIRED


def test_enabled_item_goes_through_router():
    item = NavItem("hospitalDashboard", "Hospital", "LayoutDashboard", "hospitalDashboard")

    assert activate_item(item, UserRole.HOSPITAL, True).allowed
    assert activate_item(item, UserRole.AGENT, True).screen == "agentDashboard"


def test_role_items_follow_base_items():
    keys = [item.key for item in access.navigation_items(UserRole.AGENT, True)]

    assert keys[:5] == ["home", "donorSearch", "hospitals", "profile", "messages"]
    assert "agentEarnings" in keys
    assert "adminUsers" not in keys


def test_accessible_screens_match_role_table():
    keys = {screen.key for screen in access.accessible_screens(UserRole.HOSPITAL)}

    assert "hospitalSubscription" in keys
    assert "adminDashboard" not in keys
    assert "login" not in keys
    assert access.accessible_screens(None) == []


def test_breadcrumbs_include_role_base():
    crumbs = access.breadcrumbs("/hospital/requests", UserRole.HOSPITAL)

    assert [c["label"] for c in crumbs] == ["Home", "Hospital", "Blood Requests"]
    assert crumbs[1]["path"] == "/hospital/dashboard"


def test_breadcrumbs_for_donor_home():
    assert access.breadcrumbs("/", UserRole.DONOR) == [{"label": "Home", "path": "/", "icon": "Home"}]


def test_legacy_user_role_reads_as_donor():
    assert UserRole.parse("user") == UserRole.DONOR
    assert UserRole.parse("Hospital") == UserRole.HOSPITAL
    assert UserRole.parse("superuser") is None
    assert UserRole.parse(None) is None
