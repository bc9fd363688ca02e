"""
OpenTelemetry resource describing the monitored service.
"""

from opentelemetry.sdk.resources import (
    DEPLOYMENT_ENVIRONMENT,
    HOST_NAME,
    SERVICE_INSTANCE_ID,
    SERVICE_NAME,
    Resource,
)


def build_resource(
    service_name: str,
    environment: str = "",
    instance_name: str = "",
    instance_host: str = ""
) -> Resource:
    """Build the resource attached to every span and metric."""
    attributes = {
        SERVICE_NAME: service_name,
        SERVICE_INSTANCE_ID: instance_name,
        HOST_NAME: instance_host,
        DEPLOYMENT_ENVIRONMENT: environment,
    }
    return Resource.create(attributes)
