import pytest

from pagekit.framework import session as session_module
from pagekit.framework.playwright_driver import PlaywrightDriver
from pagekit.framework.session import Session


class DummyPage:
    def __init__(self):
        self.default_timeout = None

    def set_default_timeout(self, timeout):
        self.default_timeout = timeout


class DummyContext:
    def __init__(self, options):
        self.options = options
        self.closed = False
        self.page = DummyPage()

    def new_page(self):
        return self.page

    def close(self):
        self.closed = True


class DummyBrowser:
    def __init__(self, options):
        self.options = options
        self.closed = False
        self.context = None

    def new_context(self, **options):
        self.context = DummyContext(options)
        return self.context

    def close(self):
        self.closed = True


class DummyLauncher:
    def __init__(self, name):
        self.name = name
        self.browser = None

    def launch(self, **options):
        self.browser = DummyBrowser(options)
        return self.browser


class DummyPlaywright:
    def __init__(self):
        self.chromium = DummyLauncher("chromium")
        self.firefox = DummyLauncher("firefox")
        self.webkit = DummyLauncher("webkit")
        self.stopped = False

    def start(self):
        return self

    def stop(self):
        self.stopped = True


@pytest.fixture
def playwright(monkeypatch):
    instances = []

    def fake_sync_playwright():
        instance = DummyPlaywright()
        instances.append(instance)
        return instance

    monkeypatch.setattr(session_module, "sync_playwright", fake_sync_playwright)
    yield instances
    Session.teardown()


def test_start_launches_the_configured_browser(playwright):
    session = Session(browser_type="firefox", headless=False).start()

    launcher = playwright[0].firefox
    assert launcher.browser.options["headless"] is False
    assert launcher.browser.context.options["ignore_https_errors"] is True
    assert session.page.default_timeout == 30000
    assert isinstance(session.driver, PlaywrightDriver)
    assert session.driver.page is session.page


def test_unknown_browser_falls_back_to_chromium(playwright):
    Session(browser_type="netscape").start()
    assert playwright[0].chromium.browser is not None


def test_start_is_idempotent(playwright):
    session = Session()
    session.start()
    session.start()
    assert len(playwright) == 1


def test_driver_starts_the_session_lazily(playwright):
    session = Session()
    assert not session.started
    session.driver
    assert session.started


def test_close_releases_everything(playwright):
    session = Session().start()
    browser = playwright[0].chromium.browser

    session.close()
    assert browser.context.closed
    assert browser.closed
    assert playwright[0].stopped
    assert not session.started
    assert session.page is None


def test_context_manager(playwright):
    with Session() as session:
        assert session.started
    assert not session.started
    assert playwright[0].stopped


def test_shared_session_lifecycle(playwright):
    first = Session.shared()
    assert Session.shared() is first
    assert len(playwright) == 1

    Session.teardown()
    assert playwright[0].stopped
    assert Session.shared() is not first
    assert len(playwright) == 2


def test_teardown_without_session_is_a_no_op(playwright):
    Session.teardown()
    assert playwright == []


def test_failing_browser_close_still_stops_playwright(playwright, monkeypatch):
    Session.shared()
    browser = playwright[0].chromium.browser

    def broken_close():
        raise RuntimeError("browser has crashed")

    monkeypatch.setattr(browser, "close", broken_close)

    with pytest.raises(RuntimeError, match="crashed"):
        Session.teardown()
    assert playwright[0].stopped
    assert Session._shared is None
    assert Session.shared() is not None
    assert len(playwright) == 2
