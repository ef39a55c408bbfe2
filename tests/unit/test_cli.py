"""Unit tests for CLI components."""

import json
from unittest.mock import Mock, patch

from click.testing import CliRunner

from train_timetable.cli.main import cli
from train_timetable.core.exceptions import RouteNotFoundError, StorageError
from train_timetable.core.models import RouteComparison, RouteStep, UpdateResult


class TestCLI:
    """Test CLI commands."""

    def setup_method(self):
        """Set up test fixtures."""
        self.runner = CliRunner()

    def test_cli_version(self):
        result = self.runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_cli_help(self):
        result = self.runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Train Timetable" in result.output

    @patch("train_timetable.cli.main.TimetableUpdater")
    def test_update_json(self, mock_updater_class, store_path):
        mock_updater = Mock()
        mock_updater.update_timetables.return_value = UpdateResult(
            success=True, message="時刻表データを更新しました（2駅）", updated_station_count=2
        )
        mock_updater_class.return_value = mock_updater

        result = self.runner.invoke(
            cli, ["--data", str(store_path), "update", "--json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data == {
            "success": True,
            "message": "時刻表データを更新しました（2駅）",
            "updatedStationCount": 2,
        }

    @patch("train_timetable.cli.main.TimetableUpdater")
    def test_update_storage_error(self, mock_updater_class, store_path):
        mock_updater = Mock()
        mock_updater.update_timetables.side_effect = StorageError("disk full")
        mock_updater_class.return_value = mock_updater

        result = self.runner.invoke(
            cli, ["--data", str(store_path), "update", "--json"]
        )

        assert result.exit_code == 1
        assert json.loads(result.output) == {"error": "disk full"}

    def test_stations(self, store_path):
        result = self.runner.invoke(cli, ["--data", str(store_path), "stations"])

        assert result.exit_code == 0
        assert "nankai_suminoe" in result.output
        assert "杉本町" in result.output

    def test_show(self, store_path):
        result = self.runner.invoke(
            cli,
            ["--data", str(store_path), "show", "jr_sugimotocho", "--day-type", "weekdays"],
        )

        assert result.exit_code == 0
        assert "天王寺 方面" in result.output
        assert "00 30" in result.output

    def test_show_unknown_station(self, store_path):
        result = self.runner.invoke(cli, ["--data", str(store_path), "show", "nowhere"])

        assert result.exit_code == 1

    def test_missing_store(self, tmp_path):
        result = self.runner.invoke(
            cli, ["--data", str(tmp_path / "missing.json"), "stations"]
        )

        assert result.exit_code == 1

    def test_feed_json(self, store_path):
        result = self.runner.invoke(
            cli,
            [
                "--data",
                str(store_path),
                "feed",
                "--day-type",
                "weekdays",
                "--bound",
                "southbound",
                "--format",
                "json",
            ],
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert len(data) == 1
        assert data[0]["direction"] == "和歌山 方面"
        assert data[0]["departure"] == {"hour": 6, "minute": 15}

    def test_route_link(self):
        result = self.runner.invoke(cli, ["route", "我孫子道", "天王寺", "--link"])

        assert result.exit_code == 0
        assert result.output.startswith("https://transit.yahoo.co.jp/search/result?")

    @patch("train_timetable.cli.main.YahooRouteSearcher")
    def test_route_json(self, mock_searcher_class):
        mock_searcher = Mock()
        mock_searcher.compare.return_value = RouteComparison(
            from_station="我孫子道",
            to_station="天王寺",
            total_time=18,
            total_cost=230,
            steps=[RouteStep(line="阪堺線", from_station="我孫子道", to_station="天王寺駅前", time=18)],
        )
        mock_searcher_class.return_value = mock_searcher

        result = self.runner.invoke(
            cli, ["route", "我孫子道", "天王寺", "--format", "json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["total_time"] == 18
        assert data["steps"][0]["line"] == "阪堺線"

    @patch("train_timetable.cli.main.YahooRouteSearcher")
    def test_route_not_found(self, mock_searcher_class):
        mock_searcher = Mock()
        mock_searcher.compare.side_effect = RouteNotFoundError("No route found")
        mock_searcher_class.return_value = mock_searcher

        result = self.runner.invoke(cli, ["route", "どこか", "天王寺"])

        assert result.exit_code == 1

    @patch("train_timetable.cli.main.YahooRouteSearcher")
    def test_route_uses_settings_timeout(self, mock_searcher_class, monkeypatch):
        monkeypatch.setenv("TRAIN_TIMETABLE_TIMEOUT", "7")
        mock_searcher = Mock()
        mock_searcher.compare.return_value = RouteComparison(
            from_station="杉本町", to_station="天王寺"
        )
        mock_searcher_class.return_value = mock_searcher

        result = self.runner.invoke(
            cli, ["route", "杉本町", "天王寺", "--format", "json"]
        )

        assert result.exit_code == 0
        mock_searcher_class.assert_called_once_with(
            timeout=7, base_url="https://transit.yahoo.co.jp"
        )

    @patch("train_timetable.cli.main.YahooRouteSearcher")
    def test_route_timeout_option_overrides_settings(
        self, mock_searcher_class, monkeypatch
    ):
        monkeypatch.setenv("TRAIN_TIMETABLE_TIMEOUT", "7")
        mock_searcher = Mock()
        mock_searcher.compare.return_value = RouteComparison(
            from_station="杉本町", to_station="天王寺"
        )
        mock_searcher_class.return_value = mock_searcher

        self.runner.invoke(
            cli, ["route", "杉本町", "天王寺", "--timeout", "3", "--format", "json"]
        )

        assert mock_searcher_class.call_args.kwargs["timeout"] == 3

    def test_update_rejects_non_positive_timeout(self, store_path):
        result = self.runner.invoke(
            cli, ["--data", str(store_path), "update", "--timeout", "-5"]
        )

        assert result.exit_code == 2

    def test_route_rejects_zero_timeout(self):
        result = self.runner.invoke(cli, ["route", "a", "b", "--timeout", "0"])

        assert result.exit_code == 2
