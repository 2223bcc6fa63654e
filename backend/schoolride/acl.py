"""Role constants and authorization guards.

Every workflow operation receives the acting user explicitly and calls one
of the guards below before reading or mutating anything.  Keeping the
checks in one place makes it easy to audit the security model.
"""

from schoolride.errors import NotAuthorizedError

ROLE_PARENT = "parent"
ROLE_DRIVER = "driver"
ROLE_ADMIN = "admin"

# Roles a new account may pick at registration.  Admins are created by
# bootstrapping the first account.
SELF_REGISTER_ROLES = [ROLE_PARENT, ROLE_DRIVER]


def ensure_admin(actor) -> None:
    if actor.role != ROLE_ADMIN:
        raise NotAuthorizedError("Only admins may manage assignments")


def ensure_ride_driver(actor, ride) -> None:
    """Only the driver a ride is scheduled for may change its status."""
    if actor.role != ROLE_DRIVER or ride.driver_id != actor.id:
        raise NotAuthorizedError("Only the ride's driver may update its status")


def ensure_can_view_driver(actor, driver_id: int) -> None:
    if actor.role == ROLE_ADMIN:
        return
    if actor.role != ROLE_DRIVER or actor.id != driver_id:
        raise NotAuthorizedError("Not allowed to view another driver's rides")


def ensure_can_view_parent(actor, parent_id: int) -> None:
    if actor.role == ROLE_ADMIN:
        return
    if actor.role != ROLE_PARENT or actor.id != parent_id:
        raise NotAuthorizedError("Not allowed to view another parent's rides")


def can_view_child(actor, child) -> bool:
    """Owner parent, assigned driver and admins may see a child."""
    if actor.role == ROLE_ADMIN:
        return True
    if actor.role == ROLE_PARENT:
        return child.parent_id == actor.id
    if actor.role == ROLE_DRIVER:
        return child.assigned_driver_id == actor.id
    return False
