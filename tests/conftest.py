"""Test configuration and fixtures."""

import json

import pytest

from train_timetable.core.models import Direction, StationConfig


@pytest.fixture
def primary_timetable_html():
    """Yahoo Transit timetable page with the diagram table classes."""
    return """
    <html><body>
    <div id="tab-1">
    <table class="tbl-dia">
        <tr><th class="col-hour">時</th><th class="col-min">平日</th></tr>
        <tr>
            <td class="col-hour">5</td>
            <td class="col-min"><ul>
                <li><dl><dt class="time">48</dt><dd>なんば</dd></dl></li>
            </ul></td>
        </tr>
        <tr>
            <td class="col-hour">6</td>
            <td class="col-min"><ul>
                <li><dl><dt class="time">12</dt></dl></li>
                <li><dl><dt class="time">35</dt></dl></li>
                <li><dl><dt class="time">05</dt></dl></li>
            </ul></td>
        </tr>
        <tr>
            <td class="col-hour">24</td>
            <td class="col-min"><ul>
                <li><dl><dt class="time">10</dt></dl></li>
            </ul></td>
        </tr>
    </table>
    </div>
    </body></html>
    """


@pytest.fixture
def fallback_timetable_html():
    """The same times as ``primary_timetable_html`` in a plain table."""
    return """
    <html><body>
    <table>
        <tr><th>時</th><th>分</th></tr>
        <tr><td>5</td><td><ul><li>48[な]</li></ul></td></tr>
        <tr><td>6</td><td><ul><li>12</li><li>35</li><li>05</li></ul></td></tr>
        <tr><td>24</td><td><ul><li>10</li></ul></td></tr>
    </table>
    </body></html>
    """


@pytest.fixture
def hour_seven_html():
    """Single-row page from the reference example."""
    return (
        '<table><tr><td class="col-hour">7</td><td><ul>'
        '<li><span class="time">05</span></li>'
        '<li><span class="time">23</span></li>'
        "</ul></td></tr></table>"
    )


@pytest.fixture
def two_direction_config():
    """Station configuration with two directions."""
    return StationConfig(
        id="nankai_suminoe",
        external_station_id="25989",
        directions=(
            Direction(label="なんば 方面", external_direction_id=3950),
            Direction(label="和歌山市 方面", external_direction_id=3951),
        ),
    )


@pytest.fixture
def sample_store_data():
    """Store contents with prior timetables for two stations."""
    return {
        "stations": [
            {
                "id": "nankai_suminoe",
                "name": "住ノ江",
                "lineName": "南海本線",
                "color": "#ff6f00",
                "timetables": {
                    "weekdays": [
                        {
                            "direction": "なんば 方面",
                            "departures": [{"hour": 6, "minute": 1}],
                        }
                    ],
                    "holidays": [
                        {
                            "direction": "なんば 方面",
                            "departures": [{"hour": 7, "minute": 2}],
                        }
                    ],
                },
            },
            {
                "id": "jr_sugimotocho",
                "name": "杉本町",
                "lineName": "JR阪和線",
                "color": "#c62828",
                "timetables": {
                    "weekdays": [
                        {
                            "direction": "天王寺 方面",
                            "departures": [
                                {"hour": 6, "minute": 0},
                                {"hour": 6, "minute": 30},
                            ],
                        },
                        {
                            "direction": "和歌山 方面",
                            "departures": [{"hour": 6, "minute": 15}],
                        },
                    ],
                    "holidays": [
                        {
                            "direction": "天王寺 方面",
                            "departures": [{"hour": 8, "minute": 0}],
                        }
                    ],
                },
            },
        ]
    }


@pytest.fixture
def store_path(tmp_path, sample_store_data):
    """Temporary ``stations.json`` populated with ``sample_store_data``."""
    path = tmp_path / "data" / "stations.json"
    path.parent.mkdir()
    path.write_text(json.dumps(sample_store_data, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def sample_route_result_html():
    """Yahoo Transit route search result page."""
    return """
    <div id="srline">
    <div class="route detail">
        <ul class="summary">
            <li class="time">10:02発→10:35着33分（乗車26分）</li>
            <li class="transfer">乗換：1回</li>
            <li class="fare">IC優先：1,230円</li>
            <li class="distance">32.4km</li>
        </ul>
    </div>
    </div>
    """


@pytest.fixture
def sample_route_steps_html():
    """Route result page with per-leg details."""
    return """
    <div class="routeSummary">
        <p class="time">1時間5分</p>
        <p class="fare">870円</p>
        <ol class="routeList">
            <li><span class="line">南海本線</span><span class="station">住ノ江</span><span class="station">なんば</span> 12分</li>
            <li>徒歩 5分</li>
            <li><span class="line">大阪メトロ御堂筋線</span><span class="station">なんば</span><span class="station">梅田</span> 8分</li>
        </ol>
    </div>
    """
