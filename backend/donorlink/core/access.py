"""
Role-based screen routing.

Every screen the client can show is declared once in ``SCREENS``. The router
consults that table to decide whether a requested screen renders or where the
caller is redirected instead. Decisions are plain values, a denied request is
never raised as an exception.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional

from donorlink.core.roles import ALL_ROLES, UserRole

logger = logging.getLogger(__name__)

DONOR = UserRole.DONOR
HOSPITAL = UserRole.HOSPITAL
AGENT = UserRole.AGENT
ADMIN = UserRole.ADMIN

LOGIN_SCREEN = "login"


class AccessSignal(str, Enum):
    NONE = "none"
    AUTH_REQUIRED = "auth_required"
    ROLE_FORBIDDEN = "role_forbidden"


@dataclass(frozen=True)
class Screen:
    key: str
    path: str
    title: str
    component: str
    allowed_roles: frozenset = frozenset()
    requires_auth: bool = True
    admin_only: bool = False


@dataclass(frozen=True)
class RouteDecision:
    requested: str
    screen: str
    redirected: bool = False
    signal: AccessSignal = AccessSignal.NONE

    @property
    def allowed(self) -> bool:
        return not self.redirected


@dataclass(frozen=True)
class NavItem:
    key: str
    label: str
    icon: str
    screen: str
    requires_auth: bool = False
    enabled: bool = True


def _screen(key, path, title, component, roles=ALL_ROLES, requires_auth=True, admin_only=False):
    return Screen(
        key=key,
        path=path,
        title=title,
        component=component,
        allowed_roles=frozenset(roles),
        requires_auth=requires_auth,
        admin_only=admin_only,
    )


_SCREEN_LIST = [
    # Shared screens
    _screen("home", "/", "Home", "Home"),
    _screen("profile", "/profile", "Profile", "Profile"),
    _screen("editProfile", "/profile/edit", "Edit Profile", "EditProfile"),
    _screen("donorSearch", "/donors", "Find Donors", "DonorSearch"),
    _screen("hospitals", "/hospitals", "Hospitals", "Hospitals"),
    _screen("banks", "/banks", "Blood Banks", "BloodBanks"),
    _screen("messages", "/messages", "Messages", "Messages"),
    _screen("settings", "/settings", "Settings", "Settings"),

    # Donor screens
    _screen("donations", "/donations", "Donations", "Donations", roles={DONOR, ADMIN}),
    _screen("donationHistory", "/donations/history", "Donation History", "DonationHistory",
            roles={DONOR, ADMIN}),

    # Hospital screens
    _screen("hospitalDashboard", "/hospital/dashboard", "Dashboard", "HospitalDashboard",
            roles={HOSPITAL, ADMIN}),
    _screen("hospitalRequests", "/hospital/requests", "Blood Requests", "HospitalRequests",
            roles={HOSPITAL, ADMIN}),
    _screen("hospitalSubscription", "/hospital/subscription", "Subscription",
            "HospitalSubscription", roles={HOSPITAL, ADMIN}),

    # Agent screens
    _screen("agentDashboard", "/agent/dashboard", "Dashboard", "AgentDashboard",
            roles={AGENT, ADMIN}),
    _screen("agentReferrals", "/agent/referrals", "Referrals", "AgentReferrals",
            roles={AGENT, ADMIN}),
    _screen("agentCommissions", "/agent/commissions", "Commissions", "AgentCommissions",
            roles={AGENT, ADMIN}),
    _screen("agentEarnings", "/agent/earnings", "Earnings", "AgentEarnings",
            roles={AGENT, ADMIN}),

    # Admin screens
    _screen("adminDashboard", "/admin/dashboard", "Admin Dashboard", "AdminDashboard",
            roles={ADMIN}, admin_only=True),
    _screen("adminUsers", "/admin/users", "Users", "AdminUsers", roles={ADMIN}, admin_only=True),
    _screen("adminHospitals", "/admin/hospitals", "Hospitals", "AdminHospitals",
            roles={ADMIN}, admin_only=True),
    _screen("adminAgents", "/admin/agents", "Agents", "AdminAgents", roles={ADMIN}, admin_only=True),
    _screen("adminDonations", "/admin/donations", "Donations", "AdminDonations",
            roles={ADMIN}, admin_only=True),
    _screen("adminCommissions", "/admin/commissions", "Commissions", "AdminCommissions",
            roles={ADMIN}, admin_only=True),
    _screen("adminAnalytics", "/admin/analytics", "Analytics", "AdminAnalytics",
            roles={ADMIN}, admin_only=True),
    _screen("adminSettings", "/admin/settings", "Settings", "AdminSettings",
            roles={ADMIN}, admin_only=True),

    # Auth screens are public
    _screen("login", "/auth/login", "Login", "Login", roles=(), requires_auth=False),
    _screen("signup", "/auth/signup", "Signup", "RoleBasedSignup", roles=(), requires_auth=False),
    _screen("resetPassword", "/auth/reset-password", "Reset Password", "ResetPassword",
            roles=(), requires_auth=False),
]

SCREENS: Dict[str, Screen] = {screen.key: screen for screen in _SCREEN_LIST}

DEFAULT_SCREENS: Dict[UserRole, str] = {
    DONOR: "home",
    HOSPITAL: "hospitalDashboard",
    AGENT: "agentDashboard",
    ADMIN: "adminDashboard",
}


def default_screen(role: Optional[UserRole]) -> str:
    if role is None:
        return LOGIN_SCREEN
    return DEFAULT_SCREENS.get(role, LOGIN_SCREEN)


def _effective_session(role, authenticated):
    # no role yet means no usable login
    if not authenticated or role is None:
        return False, None
    return True, role


def resolve(role: Optional[UserRole], authenticated: bool, requested: str) -> RouteDecision:
    """Decide which screen renders for ``requested``.

    Rules are checked in order and the first match wins:

    1. ``requires_auth`` without authentication redirects to ``login``.
    2. ``admin_only`` for a non-admin redirects to the role's default.
    3. A role outside ``allowed_roles`` redirects to the role's default.

    A role that arrives without authentication is ignored, and a session whose
    profile has not loaded yet is treated exactly like an anonymous one.
    """
    authenticated, role = _effective_session(role, authenticated)
    fallback = default_screen(role)

    screen = SCREENS.get(requested)
    if screen is None:
        logger.info("Unknown screen %r, using default %r", requested, fallback)
        return RouteDecision(requested=requested, screen=fallback, redirected=True)

    if screen.requires_auth and not authenticated:
        return _redirect(requested, LOGIN_SCREEN, AccessSignal.AUTH_REQUIRED)

    if screen.admin_only and role != ADMIN:
        return _redirect(requested, fallback, AccessSignal.ROLE_FORBIDDEN)

    if screen.allowed_roles and role not in screen.allowed_roles:
        return _redirect(requested, fallback, AccessSignal.ROLE_FORBIDDEN)

    return RouteDecision(requested=requested, screen=screen.key)


def resolve_screen(session, requested: str) -> RouteDecision:
    return resolve(session.role, session.authenticated, requested)


def _redirect(requested, target, signal):
    logger.debug("Redirecting %r to %r (%s)", requested, target, signal.value)
    return RouteDecision(requested=requested, screen=target, redirected=True, signal=signal)


# ---------------- NAVIGATION ----------------

BASE_NAV_ITEMS: List[NavItem] = [
    NavItem("home", "Home", "Home", "home"),
    NavItem("donorSearch", "Find Donors", "Users", "donorSearch"),
    NavItem("hospitals", "Hospitals", "Building", "hospitals"),
    NavItem("profile", "Profile", "User", "profile", requires_auth=True),
    NavItem("messages", "Messages", "MessageCircle", "messages", requires_auth=True),
]

ROLE_NAV_ITEMS: Dict[UserRole, List[NavItem]] = {
    DONOR: [
        NavItem("donations", "Donate", "Heart", "donations"),
    ],
    HOSPITAL: [
        NavItem("hospitalDashboard", "Hospital", "LayoutDashboard", "hospitalDashboard"),
        NavItem("hospitalRequests", "Requests", "FileText", "hospitalRequests"),
        NavItem("hospitalSubscription", "Subscription", "CreditCard", "hospitalSubscription"),
    ],
    AGENT: [
        NavItem("agentDashboard", "Agent", "LayoutDashboard", "agentDashboard"),
        NavItem("agentReferrals", "Referrals", "UserPlus", "agentReferrals"),
        NavItem("agentCommissions", "Commissions", "TrendingUp", "agentCommissions"),
        NavItem("agentEarnings", "Earnings", "IndianRupee", "agentEarnings"),
    ],
    ADMIN: [
        NavItem("adminDashboard", "Admin", "LayoutDashboard", "adminDashboard"),
        NavItem("adminUsers", "Users", "Users", "adminUsers"),
        NavItem("adminHospitals", "Hospitals", "Building", "adminHospitals"),
        NavItem("adminAgents", "Agents", "UserCheck", "adminAgents"),
        NavItem("adminDonations", "Donations", "Heart", "adminDonations"),
    ],
}


def navigation_items(role: Optional[UserRole], authenticated: bool) -> List[NavItem]:
    """Base items for everyone, then the items of the caller's role.

    Items that need a login stay in the list for anonymous callers but come
    back disabled.
    """
    authenticated, role = _effective_session(role, authenticated)
    items = list(BASE_NAV_ITEMS)
    if role is not None:
        items.extend(ROLE_NAV_ITEMS.get(role, []))
    return [
        replace(item, enabled=not (item.requires_auth and not authenticated))
        for item in items
    ]


def activate_item(item: NavItem, role: Optional[UserRole], authenticated: bool) -> RouteDecision:
    if not item.enabled:
        return _redirect(item.screen, LOGIN_SCREEN, AccessSignal.AUTH_REQUIRED)
    return resolve(role, authenticated, item.screen)


# ---------------- ROUTE HELPERS ----------------

def accessible_screens(role: Optional[UserRole]) -> List[Screen]:
    if role is None:
        return []
    return [screen for screen in SCREENS.values() if role in screen.allowed_roles]


def screen_for_path(path: str) -> Optional[Screen]:
    for screen in SCREENS.values():
        if screen.path == path:
            return screen
    return None


def breadcrumbs(path: str, role: Optional[UserRole] = None) -> List[dict]:
    crumbs = [{"label": "Home", "path": "/", "icon": "Home"}]

    if role is not None and role != DONOR:
        base = SCREENS[default_screen(role)]
        crumbs.append({"label": role.value.capitalize(), "path": base.path})

    screen = screen_for_path(path)
    if screen is not None and screen.title != "Home":
        crumbs.append({"label": screen.title, "path": path})

    return crumbs
