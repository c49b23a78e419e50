import json
import unittest
from urllib.parse import quote

from seamless_wallet.core.config import LaunchSettings, ProviderTemplateSettings
from seamless_wallet.modules.launch import (
    GameUrlResolver,
    Provider,
    ProviderDescriptor,
    ProviderRegistry,
    TemplateKind,
    UnsupportedProviderError,
    UrlConstructionFailedError,
    render_fallback_url,
)
from seamless_wallet.modules.sessions import SessionManager

from tests.support import FakeAggregator, LedgerTestCase, make_gateway


class GameUrlResolverTests(LedgerTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()
        self.aggregator = FakeAggregator()
        self.gateway = make_gateway(self.aggregator)
        self.launch_settings = LaunchSettings(
            operator_token="OP-TOKEN",
            game_id_overrides={"JILI": {"super-ace": "49"}},
        )
        self.registry = ProviderRegistry.from_settings(self.launch_settings)
        self.resolver = GameUrlResolver(
            self.registry,
            SessionManager(self.store, self.gateway),
            self.gateway,
            self.launch_settings,
        )

    async def asyncTearDown(self):
        await self.gateway.aclose()
        await super().asyncTearDown()

    async def test_unsupported_provider_fails_before_any_work(self):
        account = await self.create_account()

        with self.assertRaises(UnsupportedProviderError):
            await self.resolver.resolve_url("NETENT", "starburst", None, account)

        self.assertEqual(self.aggregator.requests, [])
        stored = await self.store.get_by_id(account.id)
        self.assertIsNone(stored.session_token)

    async def test_upstream_url_is_preferred_and_token_adopted(self):
        self.aggregator.on_json(
            "POST",
            "/api/getGameUrl",
            {"gameUrl": "https://play.example/launch?s=abc", "sessionToken": "issued-token"},
        )
        account = await self.create_account(token="cached-token")

        result = await self.resolver.resolve_url("PG", "fortune-tiger", None, account)

        self.assertFalse(result.used_fallback)
        self.assertEqual(result.url, "https://play.example/launch?s=abc")
        self.assertEqual(result.session_token, "issued-token")
        stored = await self.store.get_by_id(account.id)
        self.assertEqual(stored.session_token, "issued-token")

    async def test_upstream_receives_raw_game_code(self):
        self.aggregator.on_json("POST", "/api/getGameUrl", {"gameUrl": "https://play.example/j"})
        account = await self.create_account(token="cached-token")

        await self.resolver.resolve_url("JILI", "super-ace", None, account)

        body = json.loads(self.aggregator.calls("/api/getGameUrl")[0].content)
        self.assertEqual(body["gameCode"], "super-ace")
        self.assertEqual(body["gameId"], "super-ace")

    async def test_unreachable_upstream_falls_back_for_every_provider(self):
        self.aggregator.offline = True
        account = await self.create_account()

        for provider in Provider:
            with self.subTest(provider=provider.value):
                result = await self.resolver.resolve_url(provider.value, "lucky-game", None, account)

                self.assertTrue(result.used_fallback)
                self.assertIn("lucky-game", result.url)
                self.assertIn(quote(account.session_token, safe=""), result.url)
                self.assertTrue(result.url.startswith("https://"))

        stored = await self.store.get_by_id(account.id)
        self.assertEqual(stored.session_token, account.session_token)

    async def test_override_table_only_applies_to_fallback(self):
        self.aggregator.offline = True
        account = await self.create_account(token="cached-token")

        result = await self.resolver.resolve_url("JILI", "super-ace", None, account)

        self.assertIn("gameId=49", result.url)
        self.assertIn("gameCode=super-ace", result.url)

    async def test_known_game_id_used_when_no_override(self):
        self.aggregator.offline = True
        account = await self.create_account(token="cached-token")

        result = await self.resolver.resolve_url("PP", "gates", "vs20olympgate", account)

        self.assertIn("symbol=vs20olympgate", result.url)

    async def test_invalid_upstream_url_triggers_fallback(self):
        self.aggregator.on_json("POST", "/api/getGameUrl", {"gameUrl": "not a url"})
        account = await self.create_account(token="cached-token")

        result = await self.resolver.resolve_url("PG", "fortune-tiger", None, account)

        self.assertTrue(result.used_fallback)
        self.assertIn("operator_player_session=cached-token", result.url)
        self.assertIn("operator_token=OP-TOKEN", result.url)

    async def test_unauthorized_refreshes_session_before_fallback(self):
        self.aggregator.on_json("POST", "/api/getGameUrl", {"message": "expired"}, status_code=401)
        self.aggregator.on_json("POST", "/api/setGameSetting", "renewed-token")
        account = await self.create_account(token="stale-token")

        result = await self.resolver.resolve_url("PG", "fortune-tiger", None, account)

        self.assertTrue(result.used_fallback)
        self.assertEqual(result.session_token, "renewed-token")
        self.assertIn("renewed-token", result.url)
        stored = await self.store.get_by_id(account.id)
        self.assertEqual(stored.session_token, "renewed-token")

    async def test_missing_game_code_is_a_construction_failure(self):
        account = await self.create_account(token="cached-token")

        with self.assertRaises(UrlConstructionFailedError):
            await self.resolver.resolve_url("PG", "", None, account)


class FallbackTemplateTests(unittest.TestCase):
    def _descriptor(self, template, kind=TemplateKind.QUERY):
        return ProviderDescriptor(Provider.PG, "PG Soft", kind, template)

    def _render(self, descriptor, **overrides):
        values = {
            "game_code": "fortune-tiger",
            "game_id": "126",
            "session_token": "tok",
            "operator_token": "op",
            "language": "th",
        }
        values.update(overrides)
        return render_fallback_url(descriptor, **values)

    def test_values_are_percent_encoded(self):
        url = self._render(
            self._descriptor("https://h.example/l?g={game_code}&t={session_token}"),
            session_token="a b&c",
        )
        self.assertEqual(url, "https://h.example/l?g=fortune-tiger&t=a%20b%26c")

    def test_unknown_placeholder_fails(self):
        with self.assertRaises(UrlConstructionFailedError):
            self._render(self._descriptor("https://h.example/l?g={game}"))

    def test_missing_template_fails(self):
        with self.assertRaises(UrlConstructionFailedError):
            self._render(self._descriptor(None))

    def test_relative_result_fails(self):
        with self.assertRaises(UrlConstructionFailedError):
            self._render(self._descriptor("/launch?g={game_code}"))

    def test_path_template_needs_a_path(self):
        with self.assertRaises(UrlConstructionFailedError):
            self._render(self._descriptor("https://h.example?g={game_code}", TemplateKind.PATH))

    def test_empty_session_token_fails(self):
        with self.assertRaises(UrlConstructionFailedError):
            self._render(self._descriptor("https://h.example/l?g={game_code}"), session_token="")

    def test_registry_parses_provider_codes(self):
        settings = LaunchSettings(
            providers={"pg": ProviderTemplateSettings(display_name="PG", template="https://h.example/l?g={game_code}")}
        )
        registry = ProviderRegistry.from_settings(settings)

        self.assertEqual(registry.get(" pg ").code, Provider.PG)
        self.assertIsNone(registry.get("JILI").template)
        with self.assertRaises(UnsupportedProviderError):
            registry.get("A")
        with self.assertRaises(UnsupportedProviderError):
            registry.get(None)


if __name__ == "__main__":
    unittest.main()
