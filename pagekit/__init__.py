"""
================================================================================
pagekit
================================================================================

Page objects for browser UI tests: declare a page's elements once and get
accessors (read, set, click, check, exists) for each of them.

Example:
    from pagekit import BasePage, Session, text_field, button

    class LoginPage(BasePage):
        PAGE_URL = "/login"
        username = text_field(id="username")
        sign_in = button(text="Sign in")

    page = LoginPage(Session.shared(), visit=True)
    page.username.set("admin")
    page.sign_in.click()

================================================================================
"""

from .framework import *  # noqa: F401,F403
from .framework import __all__

__version__ = "1.0.0"
