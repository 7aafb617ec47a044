import pytest

from pagekit.framework.accessors import (
    ElementAccessor,
    button,
    checkbox,
    declare,
    div,
    divs,
    element,
    file_field,
    hidden_field,
    link,
    radio_button,
    radio_button_group,
    select_list,
    table,
    text_area,
    text_field,
)
from pagekit.framework.elements import OPTION_QUERY, Element, Link, Table, TextField
from pagekit.framework.errors import ElementNotFoundError, IdentifierError
from pagekit.framework.identifiers import ElementKind
from pagekit.framework.locator_resolver import LocatorResolver
from pagekit.framework.page_base import BasePage
from testsuites.fakes import FakeDriver, FakeElement


def locator(kind, **identifier):
    return LocatorResolver().locator_for(ElementKind(kind), identifier)


def public(accessor):
    return {name for name in dir(accessor) if not name.startswith("_")}


class SamplePage(BasePage):
    first_name = text_field(id="first_name")
    active = checkbox(id="cb1")
    favorite = radio_button(id="first")
    google_search = link(link="Google Search")
    message = div(name="msg", index=1)
    state = select_list(id="state")
    cart = table(id="cart")
    results = divs(class_="result")
    color = radio_button_group(name="color")
    banner = element("section", id="banner")
    secret = hidden_field(id="ssn")
    upload = file_field(id="upload")


@pytest.fixture
def driver():
    return FakeDriver()


@pytest.fixture
def page(driver):
    return SamplePage(driver)


def test_checkbox_bundle_is_exactly_its_operations(driver, page):
    assert public(page.active) == {"check", "uncheck", "is_checked", "element", "exists"}

    box = FakeElement("input", attributes={"type": "checkbox"})
    driver.register(locator("checkbox", id="cb1"), box)
    page.active.check()
    assert page.active.is_checked()
    page.active.uncheck()
    assert not box.checked
    assert page.active.exists()


def test_bundles_per_kind(page):
    assert public(page.first_name) == {"value", "set", "element", "exists"}
    assert public(page.secret) == {"value", "element", "exists"}
    assert public(page.upload) == {"set", "element", "exists"}
    assert public(page.message) == {"value", "element", "exists"}
    assert public(page.google_search) == {"click", "element", "exists"}
    assert public(page.favorite) == {"select", "clear", "is_selected", "element", "exists"}
    assert public(page.cart) == {"element", "exists"}
    assert public(page.banner) == {"text", "element", "exists"}


def test_class_access_returns_the_descriptor():
    assert isinstance(SamplePage.first_name, ElementAccessor)
    assert SamplePage.first_name.declaration.kind is ElementKind.TEXT_FIELD


def test_value_bearing_accessors(driver, page):
    field = FakeElement("input", value="")
    driver.register(locator("text_field", id="first_name"), field)

    page.first_name.set("Cheezy")
    assert page.first_name.value() == "Cheezy"
    assert isinstance(page.first_name.element(), TextField)


def test_text_container_value_is_its_text(driver):
    driver.register({"xpath": ".//div[@name='msg'][2]"}, FakeElement("div", text="Saved"))
    assert SamplePage(driver).message.value() == "Saved"


def test_select_list_accessor(driver, page):
    select = FakeElement("select")
    select.add_children(
        OPTION_QUERY,
        FakeElement("option", text="Ohio", value="OH", selected=True),
        FakeElement("option", text="Texas", value="TX"),
    )
    driver.register(locator("select_list", id="state"), select)

    assert page.state.value() == "Ohio"
    page.state.set("Texas")
    assert page.state.value() == "Texas"


def test_hidden_and_file_fields(driver, page):
    driver.register(locator("hidden_field", id="ssn"), FakeElement("input", value="12345"))
    upload = FakeElement("input")
    driver.register(locator("file_field", id="upload"), upload)

    assert page.secret.value() == "12345"
    page.upload.set("/tmp/report.pdf")
    assert upload.value() == "/tmp/report.pdf"


def test_action_accessor_clicks(driver, page):
    anchor = FakeElement("a", text="Google Search")
    driver.register({"tag_name": "a", "text": "Google Search"}, anchor)

    page.google_search.click()
    assert anchor.actions == [("click",)]


def test_kind_suffixed_alias(driver, page):
    anchor = FakeElement("a")
    driver.register({"tag_name": "a", "text": "Google Search"}, anchor)

    handle = page.google_search_link()
    assert isinstance(handle, Link)
    assert handle == page.google_search.element()
    assert hasattr(page, "first_name_text_field")
    assert hasattr(page, "results_divs")
    assert isinstance(page.cart_table(), Table)


def test_generic_element(driver, page):
    driver.register({"tag_name": "section", "id": "banner"}, FakeElement("section", text="Welcome"))
    assert page.banner.text() == "Welcome"
    assert type(page.banner.element()) is Element


def test_static_identifier_survives_repeated_lookups(driver, page):
    driver.register({"xpath": ".//div[@name='msg'][2]"}, FakeElement("div"))
    assert page.message.exists()
    assert page.message.exists()

    assert driver.lookups() == [{"xpath": ".//div[@name='msg'][2]"}] * 2
    assert SamplePage.declarations["message"].identifier == {"name": "msg", "index": 1}


def test_block_is_called_on_every_access(driver):
    calls = []

    def first_name_block(page):
        calls.append(page)
        return page.find("text_field", id="first_name")

    class BlockPage(BasePage):
        first_name = text_field(block=first_name_block)
        active = checkbox(block=lambda page: {"id": "cb1"})

    driver.register(locator("text_field", id="first_name"), FakeElement("input", value="x"))
    driver.register(locator("checkbox", id="cb1"), FakeElement("input"))
    page = BlockPage(driver)

    assert page.first_name.value() == "x"
    assert page.first_name.exists()
    assert calls == [page, page]
    page.active.check()
    assert page.active.is_checked()


def test_collection_accessor(driver, page):
    assert not page.results.exists()
    assert len(page.results) == 0

    driver.register(
        {"class": "result", "tag_name": "div"},
        FakeElement("div", text="one"),
        FakeElement("div", text="two"),
    )
    assert page.results.exists()
    assert len(page.results) == 2
    assert [d.text() for d in page.results] == ["one", "two"]
    assert page.results[1].text() == "two"
    assert public(page.results) >= {"all", "element", "exists"}


def test_radio_button_group(driver, page):
    red = FakeElement("input", value="red")
    blue = FakeElement("input", value="blue")
    driver.register(locator("radio_button", name="color"), red, blue)

    assert page.color.values() == ["red", "blue"]
    assert page.color.selected() is None
    assert not page.color.is_any_selected()

    page.color.select("blue")
    assert blue.checked and not red.checked
    assert page.color.selected() == "blue"
    assert page.color.is_any_selected()
    assert page.color.exists()
    assert len(page.color.elements()) == 2

    with pytest.raises(ElementNotFoundError):
        page.color.select("green")


def test_declarations_are_collected_per_class():
    class ChildPage(SamplePage):
        first_name = text_area(id="bio")
        extra = button(id="go")

    assert ChildPage.declarations["first_name"].kind is ElementKind.TEXT_AREA
    assert SamplePage.declarations["first_name"].kind is ElementKind.TEXT_FIELD
    assert "extra" in ChildPage.declarations
    assert "extra" not in SamplePage.declarations
    assert set(SamplePage.declarations) == {
        "first_name", "active", "favorite", "google_search", "message", "state",
        "cart", "results", "color", "banner", "secret", "upload",
    }


def test_declare_programmatically(driver):
    class MenuPage(BasePage):
        pass

    home = FakeElement("a")
    driver.register({"id": "home", "tag_name": "a"}, home)

    declaration = declare(MenuPage, "link", "home", {"id": "home"})
    assert declaration.kind is ElementKind.LINK
    assert MenuPage.declarations["home"] is declaration

    page = MenuPage(driver)
    page.home.click()
    assert home.actions == [("click",)]
    assert isinstance(page.home_link(), Link)

    declare(MenuPage, ElementKind.BUTTON, "home", {"id": "home"})
    assert MenuPage.declarations["home"].kind is ElementKind.BUTTON
    assert not hasattr(MenuPage, "home_link")
    assert hasattr(MenuPage, "home_button")
    assert "home" not in BasePage.declarations


def test_declaration_needs_identifier_or_block():
    with pytest.raises(IdentifierError):
        text_field()
    with pytest.raises(IdentifierError):
        text_field({"id": "a"}, block=lambda page: {"id": "b"})
    with pytest.raises(IdentifierError):
        link(colour="red")
