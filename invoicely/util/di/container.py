"""Production container assembly and FastAPI wiring."""

import logfire
from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from invoicely.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the production container.

    Every mockable component resolves to its production provider; Settings
    are read from the environment by the config component.
    """
    providers = [get_provider(base, use_mock=False) for base in PROVIDERS]
    logfire.debug(
        "Building DI container", providers=[p.__name__ for p in providers]
    )
    # FastapiProvider exposes the Request to request-scoped factories
    return make_async_container(*(p() for p in providers), FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container so DishkaRoute handlers can resolve FromDishka[...]."""
    setup_dishka(container, app)
