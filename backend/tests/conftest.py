import asyncio
import inspect
import pathlib
import sys
from contextlib import asynccontextmanager

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.config import AppSettings  # noqa: E402
from app.core.security import create_access_token  # noqa: E402
from app.db.session import Database  # noqa: E402
from app.main import create_app  # noqa: E402

ADMIN_EMAIL = "admin@portfolio.pk"
TEST_JWT_SECRET = "portfolio-tracker-test-secret-0123456789"


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers used in the suite."""

    config.addinivalue_line("markers", "asyncio: mark test as running in an asyncio event loop")


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Execute async test functions without requiring pytest-asyncio."""

    test_function = pyfuncitem.obj
    if inspect.iscoroutinefunction(test_function):
        loop = asyncio.new_event_loop()
        try:
            asyncio.set_event_loop(loop)
            testargs = {name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames}
            loop.run_until_complete(test_function(**testargs))
        finally:
            asyncio.set_event_loop(None)
            loop.close()
        return True
    return None


@pytest.fixture
def make_settings(tmp_path: pathlib.Path):
    """Build settings pointing at a throwaway SQLite database."""

    def _factory(**overrides) -> AppSettings:
        values = {
            "database_url": f"sqlite+aiosqlite:///{tmp_path / 'portfolio.db'}",
            "jwt_secret": TEST_JWT_SECRET,
            "admin_email": ADMIN_EMAIL,
        }
        values.update(overrides)
        return AppSettings(**values)

    return _factory


@pytest.fixture
def make_client():
    """Return a context manager factory running the app lifespan around an HTTP client.

    With ``authenticated=True`` every request carries a bearer token for the admin.
    """

    def _factory(settings: AppSettings, *, authenticated: bool = True):
        app = create_app(Database(url=settings.database_url), settings)
        headers = {}
        if authenticated:
            headers["Authorization"] = f"Bearer {create_access_token(ADMIN_EMAIL, settings)}"

        @asynccontextmanager
        async def _manager():
            async with app.router.lifespan_context(app):
                transport = ASGITransport(app=app)
                async with AsyncClient(transport=transport, base_url="http://test", headers=headers) as client:
                    yield client

        return _manager()

    return _factory
