"""Tests for /games routes: VIP filtering and admin-only writes."""

import unittest
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from adapter.fake.account_repository import FakeAccountRepository
from adapter.fake.game_repository import FakeGameRepository
from api.dependencies import get_account_repo, get_game_repo
from api.main import app
from api.security import get_token_issuer
from domain.model.account import Account, VipMembership
from domain.model.game import Game, GameCategory, GameResult

KICK_OFF = datetime(2026, 3, 14, 15, 0, tzinfo=timezone.utc)


class GamesRoutesTestCase(unittest.TestCase):

    def setUp(self):
        self.accounts = FakeAccountRepository()
        self.games = FakeGameRepository()
        app.dependency_overrides[get_account_repo] = lambda: self.accounts
        app.dependency_overrides[get_game_repo] = lambda: self.games
        self.client = TestClient(app)

        self.admin = self.accounts.create(Account.create("root", "root@x.com", "hash", is_admin=True))
        self.user = self.accounts.create(Account.create("alice", "alice@x.com", "hash"))
        self.vip = self.accounts.create(Account.create(
            "vera", "vera@x.com", "hash", vip=VipMembership.grant(datetime.now(timezone.utc))
        ))

    def tearDown(self):
        app.dependency_overrides.clear()

    def _headers(self, account):
        token = get_token_issuer().issue(account.id, account.is_admin)
        return {"Authorization": f"Bearer {token}"}

    def _seed(self, category, match_time=KICK_OFF):
        game = Game.create("Arsenal", "Chelsea", "Over 2.5", 1.85, category, match_time, self.admin.id)
        self.games.save(game)
        return game


class TestReadRoutes(GamesRoutesTestCase):

    def setUp(self):
        super().setUp()
        self.free = self._seed(GameCategory.SURE_TIPS)
        self.premium = self._seed(GameCategory.VIP_TIPS, KICK_OFF + timedelta(hours=1))

    def test_reads_require_authentication(self):
        self.assertEqual(self.client.get("/games/all").status_code, 401)

    def test_regular_user_sees_no_vip_games(self):
        response = self.client.get("/games/date/2026-03-14", headers=self._headers(self.user))

        self.assertEqual(response.status_code, 200)
        self.assertEqual([g["id"] for g in response.json()], [self.free.id])

    def test_vip_member_sees_vip_games(self):
        response = self.client.get("/games/date/2026-03-14", headers=self._headers(self.vip))

        self.assertEqual([g["id"] for g in response.json()], [self.free.id, self.premium.id])
        self.assertEqual(response.json()[1]["category"], "VIP Tips")
        self.assertIsNone(response.json()[1]["result"])

    def test_vip_revoked_mid_session_hides_vip_games(self):
        headers = self._headers(self.vip)
        self.accounts.set_vip(self.vip.id, None)

        response = self.client.get("/games/all", headers=headers)

        self.assertNotIn(self.premium.id, [g["id"] for g in response.json()])

    def test_blocked_user_forbidden(self):
        self.accounts.set_blocked(self.user.id, True)

        response = self.client.get("/games/all", headers=self._headers(self.user))

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["reason"], "blocked")

    def test_invalid_date_rejected(self):
        response = self.client.get("/games/date/not-a-date", headers=self._headers(self.user))

        self.assertEqual(response.status_code, 422)


class TestWriteRoutes(GamesRoutesTestCase):

    def _payload(self, **overrides):
        payload = {
            "homeTeam": "Arsenal",
            "awayTeam": "Chelsea",
            "prediction": "Over 2.5",
            "odds": 1.85,
            "category": "Sure Tips",
            "matchTime": "2026-03-14T15:00:00Z",
        }
        payload.update(overrides)
        return payload

    def test_admin_creates_game(self):
        response = self.client.post("/games", json=self._payload(), headers=self._headers(self.admin))

        self.assertEqual(response.status_code, 201)
        game = response.json()["game"]
        self.assertEqual(game["homeTeam"], "Arsenal")
        self.assertEqual(game["postedBy"], self.admin.id)
        self.assertEqual(len(self.games.store), 1)

    def test_non_admin_cannot_create(self):
        response = self.client.post("/games", json=self._payload(), headers=self._headers(self.vip))

        self.assertEqual(response.status_code, 403)
        self.assertEqual(self.games.store, {})

    def test_missing_field_is_400(self):
        payload = self._payload()
        del payload["prediction"]

        response = self.client.post("/games", json=payload, headers=self._headers(self.admin))

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "prediction")

    def test_nan_odds_is_400(self):
        response = self.client.post(
            "/games", json=self._payload(odds="NaN"), headers=self._headers(self.admin)
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["field"], "odds")
        self.assertEqual(self.games.store, {})

    def test_bad_category_is_400(self):
        response = self.client.post(
            "/games", json=self._payload(category="Mega"), headers=self._headers(self.admin)
        )

        self.assertEqual(response.status_code, 400)

    def test_update_result_and_delete(self):
        game = self._seed(GameCategory.BONUS)
        headers = self._headers(self.admin)

        updated = self.client.patch(f"/games/{game.id}/result", json={"result": "win"}, headers=headers)
        self.assertEqual(updated.status_code, 200)
        self.assertEqual(updated.json()["game"]["result"], "win")

        invalid = self.client.patch(f"/games/{game.id}/result", json={"result": "draw"}, headers=headers)
        self.assertEqual(invalid.status_code, 400)

        deleted = self.client.delete(f"/games/{game.id}", headers=headers)
        self.assertEqual(deleted.status_code, 200)
        self.assertEqual(deleted.json()["message"], "Game deleted: Arsenal vs Chelsea")

        missing = self.client.delete(f"/games/{game.id}", headers=headers)
        self.assertEqual(missing.status_code, 404)

    def test_stats_summary(self):
        won = self._seed(GameCategory.SURE_TIPS)
        self._seed(GameCategory.SURE_TIPS)
        self.games.update_result(won.id, GameResult.WIN)

        response = self.client.get("/games/stats/summary", headers=self._headers(self.admin))

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["totalGames"], 2)
        self.assertEqual(body["pendingGames"], 1)
        self.assertEqual(body["categoriesStats"][0]["category"], "Sure Tips")


class TestServerErrors(GamesRoutesTestCase):

    def test_unexpected_failure_is_generic_500(self):
        class BrokenRepo(FakeGameRepository):
            def find_all(self):
                raise RuntimeError("connection reset by peer")

        app.dependency_overrides[get_game_repo] = lambda: BrokenRepo()
        client = TestClient(app, raise_server_exceptions=False)

        response = client.get("/games/all", headers=self._headers(self.admin))

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"detail": "Server error"})


if __name__ == '__main__':
    unittest.main()
