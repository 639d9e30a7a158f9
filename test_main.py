"""
Tests for the example program entry point.

HTTP is served by httpx.MockTransport injected through the MapboxClient
factory used by MapboxApp.
"""

import functools
import logging
import os
from typing import List

import httpx
import pytest

import main
from lib.mapbox import MapboxClient


@pytest.fixture(autouse=True)
def restoreRootLogger():
    rootLogger = logging.getLogger()
    handlers = rootLogger.handlers[:]
    level = rootLogger.level
    yield
    for handler in rootLogger.handlers[:]:
        rootLogger.removeHandler(handler)
    for handler in handlers:
        rootLogger.addHandler(handler)
    rootLogger.setLevel(level)


@pytest.fixture
def workDir(tmp_path, monkeypatch):
    """Run in an empty directory so no local config.toml or .env is picked up."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MAPBOX_TOKEN", "pk.test")
    return tmp_path


@pytest.fixture
def requests() -> List[httpx.Request]:
    return []


def serve(monkeypatch, requests: List[httpx.Request], response: httpx.Response) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return response

    monkeypatch.setattr(main, "MapboxClient", functools.partial(MapboxClient, transport=httpx.MockTransport(handler)))


class TestParseArguments:
    def testForward(self, workDir):
        args = main.parse_arguments(["forward", "Lincoln Memorial", "--limit", "2", "--types", "address", "place"])

        assert args.command == "forward"
        assert args.query == "Lincoln Memorial"
        assert args.limit == 2
        assert args.types == ["address", "place"]
        assert os.path.isabs(args.config)
        assert args.config.endswith("config.toml")

    def testDirectionsLocations(self):
        args = main.parse_arguments(["directions", "--profile", "cycling", "--", "-122.42,37.78", "-77.03,38.91"])

        assert args.profile == "cycling"
        assert [loc.toString() for loc in args.locations] == ["-122.42,37.78", "-77.03,38.91"]

    @pytest.mark.parametrize("value", ["1", "a,b", "200,10"])
    def testInvalidLocationRejected(self, value):
        with pytest.raises(SystemExit):
            main.parse_arguments(["directions", "--", value, "0,0"])

    def testReverseOutOfRangeRejected(self, capsys):
        with pytest.raises(SystemExit) as excInfo:
            main.parse_arguments(["reverse", "200", "10"])

        assert excInfo.value.code == 2
        assert "Longitude out of range" in capsys.readouterr().err

    def testDirectionsNeedsTwoLocations(self, capsys):
        with pytest.raises(SystemExit) as excInfo:
            main.parse_arguments(["directions", "0,0"])

        assert excInfo.value.code == 2
        assert "at least two locations" in capsys.readouterr().err

    def testCommandRequired(self):
        with pytest.raises(SystemExit):
            main.parse_arguments([])


class TestMain:
    def testForwardPrintsFeatures(self, workDir, monkeypatch, requests, capsys):
        body = {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "geometry": {"type": "Point", "coordinates": [-77.050102, 38.889352]},
                    "properties": {"name": "Lincoln Memorial", "place_formatted": "Washington, DC"},
                }
            ],
        }
        serve(monkeypatch, requests, httpx.Response(200, json=body))

        assert main.main(["forward", "Lincoln Memorial", "--limit", "1"]) == 0

        out = capsys.readouterr().out
        assert "1. Lincoln Memorial - Washington, DC" in out
        assert "-77.050102" in out
        assert requests[0].url.path == "/search/geocode/v6/forward"
        assert requests[0].url.params["q"] == "Lincoln Memorial"
        assert requests[0].url.params["access_token"] == "pk.test"

    def testDirectionsNoRouteIsNotAnError(self, workDir, monkeypatch, requests, capsys):
        serve(monkeypatch, requests, httpx.Response(200, json={"code": "NoRoute", "routes": []}))

        assert main.main(["directions", "0,0", "1,1"]) == 0

        assert "Response code: NoRoute" in capsys.readouterr().out
        assert requests[0].url.path == "/directions/v5/mapbox/driving/0,0;1,1"

    def testApiErrorExitsNonZero(self, workDir, monkeypatch, requests):
        serve(monkeypatch, requests, httpx.Response(401, json={"message": "Not Authorized - Invalid Token"}))

        assert main.main(["reverse", "--", "-77.03", "38.89"]) == 1

    def testMissingTokenExitsNonZero(self, workDir, monkeypatch, requests):
        monkeypatch.delenv("MAPBOX_TOKEN")
        serve(monkeypatch, requests, httpx.Response(200, json={}))

        assert main.main(["forward", "Paris"]) == 1
        assert requests == []

    def testPrintConfigMasksToken(self, workDir, capsys):
        (workDir / "config.toml").write_text('[mapbox]\ntoken = "pk.secret"\ntimeout = 5\n')

        assert main.main(["--print-config"]) == 0

        out = capsys.readouterr().out
        assert "pk.secret" not in out
        assert '"timeout": 5' in out

    def testForwardAppliesTypesAndProximity(self, workDir, monkeypatch, requests):
        serve(monkeypatch, requests, httpx.Response(200, json={"type": "FeatureCollection", "features": []}))

        assert main.main(["forward", "Starbucks", "--types", "address", "--proximity=-73.968285,40.785091"]) == 0

        params = requests[0].url.params
        assert params["types"] == "address"
        assert params["proximity"] == "-73.968285,40.785091"

    @pytest.mark.parametrize("argv", [["reverse", "200", "10"], ["directions", "0,0"]])
    def testInvalidCoordinatesExitWithoutRequest(self, workDir, monkeypatch, requests, argv):
        serve(monkeypatch, requests, httpx.Response(200, json={}))

        with pytest.raises(SystemExit) as excInfo:
            main.main(argv)

        assert excInfo.value.code != 0
        assert requests == []
