"""Unit tests for console label lookup"""

from apis.shared.lang import LangPropsService


def test_known_label():
    assert LangPropsService("en_US").get("notAllowRegisterLabel") == "Registration is not allowed"


def test_unknown_label_returns_key():
    assert LangPropsService("en_US").get("noSuchLabel") == "noSuchLabel"


def test_unknown_locale_falls_back_to_english():
    lang = LangPropsService("xx_XX")

    assert lang.locale == "en_US"
    assert lang.get("addSuccLabel") == "Added successfully"


def test_locale_from_environment(monkeypatch):
    monkeypatch.setenv("CONSOLE_LOCALE", "zh_CN")

    assert LangPropsService().get("removeFailLabel") == "删除失败"
