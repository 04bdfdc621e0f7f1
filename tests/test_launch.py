import pytest

from portal_harness.browser.launch import CHROMIUM_ARGS, build_launch_plan
from portal_harness.config import BrowserConfig
from portal_harness.errors import ConfigurationError
from portal_harness.models import BrowserKind


@pytest.mark.parametrize(
    ("name", "engine", "channel"),
    [
        ("chromium", "chromium", None),
        ("chrome", "chromium", "chrome"),
        ("edge", "chromium", "msedge"),
        ("firefox", "firefox", None),
        ("webkit", "webkit", None),
        ("safari", "webkit", None),
    ],
)
def test_each_browser_resolves_to_an_engine(name, engine, channel):
    plan = build_launch_plan(BrowserConfig(name=name))

    assert plan.kind is BrowserKind(name)
    assert plan.engine == engine
    assert plan.launch_kwargs.get("channel") == channel


def test_browser_name_is_case_insensitive():
    assert build_launch_plan(BrowserConfig(name=" Chrome ")).kind is BrowserKind.CHROME


def test_unknown_browser_is_a_configuration_error():
    with pytest.raises(ConfigurationError, match="Unsupported browser"):
        build_launch_plan(BrowserConfig(name="opera"))


def test_headed_chromium_uses_the_maximised_window():
    plan = build_launch_plan(BrowserConfig(name="chromium", headless=False))

    assert plan.headless is False
    assert plan.context_kwargs == {"no_viewport": True}
    assert list(plan.launch_kwargs["args"]) == list(CHROMIUM_ARGS)


def test_headless_chromium_uses_configured_viewport():
    config = BrowserConfig(name="edge", headless=True, viewport_width=1280, viewport_height=720)

    plan = build_launch_plan(config)

    assert plan.headless is True
    assert plan.context_kwargs["viewport"] == {"width": 1280, "height": 720}


def test_firefox_disables_notifications():
    plan = build_launch_plan(BrowserConfig(name="firefox", headless=True))

    assert plan.launch_kwargs["headless"] is True
    assert plan.launch_kwargs["firefox_user_prefs"]["dom.webnotifications.enabled"] is False


def test_safari_ignores_headless_flag():
    plan = build_launch_plan(BrowserConfig(name="safari", headless=True))

    assert plan.headless is False


def test_base_url_and_default_timeout_are_applied():
    config = BrowserConfig(implicit_wait=7.5)

    plan = build_launch_plan(config, base_url="http://portal.test")

    assert plan.context_kwargs["base_url"] == "http://portal.test"
    assert plan.default_timeout_ms == 7500


def test_plans_do_not_share_mutable_arguments():
    first = build_launch_plan(BrowserConfig(name="firefox"))
    first.launch_kwargs["firefox_user_prefs"]["dom.push.enabled"] = True

    second = build_launch_plan(BrowserConfig(name="firefox"))

    assert second.launch_kwargs["firefox_user_prefs"]["dom.push.enabled"] is False
