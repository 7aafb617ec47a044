import pytest
from loguru import logger

from pagekit.framework.elements import (
    CELL_QUERY,
    ITEM_QUERY,
    OPTION_QUERY,
    ROW_QUERY,
    CheckBox,
    Div,
    Element,
    Link,
    ListItem,
    OrderedList,
    RadioButton,
    SelectList,
    Table,
    TableCell,
    TextField,
    element_class_for,
)
from pagekit.framework.errors import ElementNotFoundError, NoSuchCapabilityError, WaitTimeoutError
from pagekit.framework.identifiers import ElementKind
from testsuites.fakes import FakeElement


@pytest.fixture
def warning_log():
    messages = []
    handler_id = logger.add(lambda m: messages.append(str(m)), level="WARNING")
    yield messages
    logger.remove(handler_id)


def test_state_is_read_from_the_native_element():
    native = FakeElement("input", text="", value="abc", attributes={"title": "t"}, enabled=False)
    handle = Element(native, {"id": "x"})

    assert handle.exist()
    assert handle.value() == "abc"
    assert handle.tag_name() == "input"
    assert handle.attribute("title") == "t"
    assert handle.attribute("missing") is None
    assert handle.disabled()
    assert handle.visible()


def test_actions_are_forwarded():
    native = FakeElement("a")
    handle = Link(native)

    handle.click()
    handle.double_click()
    handle.right_click()
    handle.fire_event("blur")
    handle.focus()

    assert native.actions == [
        ("click",), ("double_click",), ("right_click",), ("fire_event", "blur"), ("focus",),
    ]


def test_missing_element_reports_instead_of_acting():
    handle = Link(None, {"tag_name": "a", "id": "gone"})

    assert not handle.exist()
    with pytest.raises(ElementNotFoundError) as error:
        handle.click()
    assert "link" in str(error.value)
    assert "'gone'" in str(error.value)
    assert error.value.locator == {"tag_name": "a", "id": "gone"}


def test_equality_follows_the_native_element():
    native = FakeElement()
    assert Div(native) == Element(native)
    assert Div(native) != Div(FakeElement())
    assert Div(None) != Div(None)


def test_text_field_set_and_append():
    native = FakeElement("input", value="old")
    field = TextField(native)

    field.set("new")
    assert field.value() == "new"
    field.append("er")
    assert field.value() == "newer"
    field.clear()
    assert field.value() == ""


def test_send_keys_passes_keys_through():
    native = FakeElement("input")
    TextField(native).send_keys("tet", "ArrowLeft", ("Control", "a"))
    assert native.actions[-1] == ("send_keys", "tet", "ArrowLeft", ("Control", "a"))


def test_checkbox_and_radio_button():
    box = CheckBox(FakeElement("input"))
    box.check()
    assert box.is_checked()
    box.uncheck()
    assert not box.is_checked()

    radio = RadioButton(FakeElement("input"))
    radio.select()
    assert radio.is_selected()
    radio.clear()
    assert not radio.is_selected()


@pytest.mark.parametrize(
    "input_type, expected",
    [("checkbox", CheckBox), ("radio", RadioButton), ("text", TextField), (None, TextField)],
)
def test_parent_input_is_classified_by_type(input_type, expected):
    attributes = {"type": input_type} if input_type else {}
    parent = FakeElement("input", attributes=attributes)
    child = FakeElement("span")
    parent.add_children({"tag_name": "span"}, child)

    assert type(Element(child).parent()) is expected


def test_parent_is_classified_by_tag():
    row = FakeElement("tr")
    cell = FakeElement("td")
    row.add_children(CELL_QUERY, cell)
    assert type(TableCell(cell).parent()).__name__ == "TableRow"
    assert element_class_for("section") is Element
    assert element_class_for("INPUT", "Checkbox") is CheckBox


def _select(*options):
    select = FakeElement("select")
    select.add_children(OPTION_QUERY, *options)
    return SelectList(select, {"tag_name": "select", "id": "state"})


def test_select_list_selects_by_text_then_value():
    ohio = FakeElement("option", text="Ohio", value="OH")
    texas = FakeElement("option", text="Texas", value="TX", selected=True)
    select = _select(ohio, texas)

    assert select.value() == "Texas"
    select.select("Ohio")
    assert select.native.actions[-1] == ("select_option", "OH")
    assert select.value() == "Ohio"

    select.select("TX")
    assert select.native.actions[-1] == ("select_option", "TX")
    assert [o.text() for o in select.selected_options()] == ["Texas"]


def test_select_list_options():
    select = _select(FakeElement("option", text="A", value="a"), FakeElement("option", text="B", value="b"))
    assert len(select) == 2
    assert select[1].text() == "B"
    assert select.includes("A")
    assert not select.includes("C")
    with pytest.raises(ElementNotFoundError):
        select.select("C")


def test_table_rows_and_cells():
    table = FakeElement("table")
    rows = []
    for values in (["Name", "Qty"], ["Apple", "3"]):
        row = FakeElement("tr")
        row.add_children(CELL_QUERY, *(FakeElement("td", text=v) for v in values))
        rows.append(row)
    table.add_children(ROW_QUERY, *rows)
    handle = Table(table)

    assert len(handle) == 2
    assert handle[1][0].text() == "Apple"
    assert handle[0].columns() == 2
    assert [c.text() for c in handle[1]] == ["Apple", "3"]
    assert [[c.text() for c in row] for row in handle] == [["Name", "Qty"], ["Apple", "3"]]


def test_list_items():
    native = FakeElement("ol")
    native.add_children(ITEM_QUERY, FakeElement("li", text="one"), FakeElement("li", text="two"))
    ordered = OrderedList(native)

    assert len(ordered) == 2
    assert isinstance(ordered[0], ListItem)
    assert [item.text() for item in ordered] == ["one", "two"]


def test_find_looks_inside_the_element():
    inner = FakeElement("a", text="Home")
    container = FakeElement("div")
    container.add_children({"tag_name": "a", "text": "Home"}, inner)
    container.add_children({"xpath": ".//span[@name='badge']"}, FakeElement("span", text="3"))
    handle = Div(container)

    found = handle.find("link", link_text="Home")
    assert isinstance(found, Link)
    assert found == Link(inner)
    assert handle.find(ElementKind.SPAN, name="badge").text() == "3"
    assert not handle.find("link", text="Away").exist()
    assert handle.find_all("link", text="Home") == [Link(inner)]


def test_when_present_returns_self():
    handle = Div(FakeElement())
    assert handle.when_present(timeout=0.05) is handle
    assert handle.when_visible(timeout=0.05) is handle


def test_when_present_times_out_with_message():
    handle = Div(None, {"xpath": ".//div[@name='late']"})
    with pytest.raises(WaitTimeoutError) as error:
        handle.when_present(timeout=0.05)
    assert "not present in 0.05 seconds" in str(error.value)
    assert error.value.timeout == 0.05


def test_when_present_waits_for_an_element_found_later():
    native = FakeElement("div")
    answers = [None, None, native]
    handle = Div(None, {"id": "banner"}, lambda: answers.pop(0))

    assert handle.when_present(timeout=1) is handle
    assert handle.native is native
    assert answers == []
    # Found once, kept
    assert handle.exist()


def test_missing_element_is_looked_up_again_by_operations():
    native = FakeElement("div", text="ready")
    answers = [None, native]
    handle = Div(None, {"id": "banner"}, lambda: answers.pop(0))

    with pytest.raises(ElementNotFoundError):
        handle.text()
    assert handle.text() == "ready"


def test_nested_find_sees_children_added_later():
    parent = FakeElement("div")
    handle = Div(parent)
    badge = handle.find(ElementKind.SPAN, name="badge")
    assert not badge.exist()

    parent.add_children({"xpath": ".//span[@name='badge']"}, FakeElement("span", text="3"))
    assert badge.exist()
    assert badge.text() == "3"


def test_when_not_visible():
    native = FakeElement(visible=False)
    handle = Div(native)
    assert handle.when_not_visible(timeout=0.05) is handle
    assert Div(None).when_not_visible(timeout=0.05)

    native.is_visible = True
    with pytest.raises(WaitTimeoutError, match="still visible"):
        handle.when_not_visible(timeout=0.05)


def test_when_visible_waits_for_the_element():
    native = FakeElement(visible=False)
    polls = []

    def becomes_visible():
        polls.append(1)
        if len(polls) == 3:
            native.is_visible = True
        return native.is_visible

    native.visible = becomes_visible
    assert Div(native).when_visible(timeout=1).visible()
    assert len(polls) >= 3


def test_invoke_forwards_with_a_deprecation_warning(warning_log):
    native = FakeElement()
    assert Div(native).invoke("hover") == "hovered"
    assert any("DEPRECATED" in m and "hover" in m and "test_elements.py" in m for m in warning_log)


def test_invoke_unknown_method_names_the_call_site(warning_log):
    with pytest.raises(NoSuchCapabilityError) as error:
        Div(FakeElement()).invoke("teleport")
    assert "undefined method `teleport`" in str(error.value)
    assert "test_elements.py" in error.value.call_site
    assert isinstance(error.value, AttributeError)


def test_raw_is_logged_with_the_element(warning_log):
    native = FakeElement()
    assert Div(native, {"id": "x"}).raw() is native
    assert any("Raw native element requested for <Div id='x'>" in m for m in warning_log)
