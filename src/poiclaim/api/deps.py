"""
FastAPI dependencies for the API.

Services are built once in the application lifespan and read from
`app.state.services`.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from poiclaim.catalog import POICatalog
from poiclaim.commands import CommandInterpreter
from poiclaim.gameserver import MessageChannel
from poiclaim.registry import ClaimRegistry
from poiclaim.resolution import NameResolver
from poiclaim.security import WebhookVerifier
from poiclaim.services import AppServices


def get_services(request: Request) -> AppServices:
    services = getattr(request.app.state, "services", None)
    if services is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service is starting up",
        )
    return services


Services = Annotated[AppServices, Depends(get_services)]


def get_interpreter(services: Services) -> CommandInterpreter:
    return services.interpreter


def get_channel(services: Services) -> MessageChannel:
    return services.channel


def get_registry(services: Services) -> ClaimRegistry:
    return services.registry


def get_catalog(services: Services) -> POICatalog:
    return services.catalog


def get_resolver(services: Services) -> NameResolver:
    return services.resolver


# Type aliases for dependency injection
Interpreter = Annotated[CommandInterpreter, Depends(get_interpreter)]
Channel = Annotated[MessageChannel, Depends(get_channel)]
Registry = Annotated[ClaimRegistry, Depends(get_registry)]
Catalog = Annotated[POICatalog, Depends(get_catalog)]
Resolver = Annotated[NameResolver, Depends(get_resolver)]

verify_webhook = WebhookVerifier()
