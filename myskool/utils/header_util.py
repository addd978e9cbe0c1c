"""
Alert headers that tell the client UI what happened to an entity.

The header names carry the application name, e.g. ``X-myskoolApp-alert``.
"""
from myskool.config import settings


def create_alert(message: str, param: str, app_name: str = settings.APP_NAME) -> dict[str, str]:
    return {
        f"X-{app_name}-alert": message,
        f"X-{app_name}-params": param,
    }


def create_entity_creation_alert(entity_name: str, param: str) -> dict[str, str]:
    return create_alert(f"A new {entity_name} is created with identifier {param}", param)


def create_entity_update_alert(entity_name: str, param: str) -> dict[str, str]:
    return create_alert(f"A {entity_name} is updated with identifier {param}", param)


def create_entity_deletion_alert(entity_name: str, param: str) -> dict[str, str]:
    return create_alert(f"A {entity_name} is deleted with identifier {param}", param)


def create_failure_alert(entity_name: str, error_key: str, app_name: str = settings.APP_NAME) -> dict[str, str]:
    return {
        f"X-{app_name}-error": f"error.{error_key}",
        f"X-{app_name}-params": entity_name,
    }


def exposed_headers(app_name: str = settings.APP_NAME) -> list[str]:
    """Headers the browser is allowed to read on cross-origin responses."""
    return [
        "Link",
        "X-Total-Count",
        f"X-{app_name}-alert",
        f"X-{app_name}-error",
        f"X-{app_name}-params",
    ]
