import pytest

from pagekit.framework.playwright_driver import PlaywrightDriver, to_selector
from pagekit.framework.scope_chain import FrameKind, ScopeDescriptor


def test_xpath_is_exclusive():
    assert to_selector({"xpath": "//a", "id": "x", "index": 3}) == ("xpath=//a", None)


def test_css_keeps_the_index():
    assert to_selector({"css": "div.card", "index": 1}) == ("css=div.card", 1)


def test_attributes_become_predicates():
    assert to_selector({"tag_name": "a", "id": "home", "index": 1}) == ("xpath=.//a[@id='home']", 1)


def test_class_matches_one_of_the_classes():
    selector, _ = to_selector({"tag_name": "div", "class": "card"})
    assert selector == "xpath=.//div[contains(concat(' ', normalize-space(@class), ' '), ' card ')]"


def test_text_input_types_match_untyped_inputs():
    selector, _ = to_selector({"tag_name": "input", "type": ["text", "password"]})
    assert selector == "xpath=.//input[(@type='text' or @type='password' or not(@type))]"


def test_button_matches_inputs_and_value():
    selector, _ = to_selector({"tag_name": "button", "text": "Go"})
    assert selector.startswith("xpath=.//*[self::button or self::input[")
    assert selector.endswith("[(normalize-space()='Go' or @value='Go')]")


def test_list_values_are_or_groups():
    selector, _ = to_selector({"tag_name": "a", "text": ["Home", "Start"]})
    assert selector == "xpath=.//a[(normalize-space()='Home' or normalize-space()='Start')]"


def test_css_tag_name():
    assert to_selector({"tag_name": "div > a"}) == ("css=div > a", None)


class DummyFrameLocator:
    def __init__(self, selector):
        self.selector = selector
        self.picked = None

    @property
    def first(self):
        self.picked = "first"
        return self

    def nth(self, index):
        self.picked = index
        return self

    def frame_locator(self, selector):
        return DummyFrameLocator(selector)


class DummyPage(DummyFrameLocator):
    def __init__(self):
        super().__init__(None)
        self.visited = []

    def goto(self, url):
        self.visited.append(url)


def test_frames_are_entered_from_the_current_context():
    page = DummyPage()
    driver = PlaywrightDriver(page)

    driver.switch_to_frame(ScopeDescriptor(FrameKind.FRAME, {"id": "outer"}))
    outer = driver._context
    driver.switch_to_frame(ScopeDescriptor(FrameKind.IFRAME, {"index": 1}))
    inner = driver._context

    assert outer.selector == "xpath=.//frame[@id='outer']"
    assert outer.picked == "first"
    assert inner.selector == "xpath=.//iframe"
    assert inner.picked == 1

    driver.navigate("http://example.com")
    assert driver._context is page
    assert page.visited == ["http://example.com"]
