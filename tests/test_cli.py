import json
from unittest.mock import Mock

import pytest
from typer.testing import CliRunner

from skirank import cli
from skirank.iio.gpx_loader import TrackSourceError
from skirank.iio.tour_catalog import CatalogError, SearchArea, ToppturCatalog
from skirank.routes.rating_system import RatingSystem

from route_factory import START_LAT, START_LON, catalog_coordinates, lat_step, profile

AREA = SearchArea(ref_lat=START_LAT, ref_lon=START_LON)


def _write_gpx(path, elevations, spacing_m=20.0):
    step = lat_step(spacing_m)
    points = "\n".join(
        f'<trkpt lat="{START_LAT + i * step}" lon="{START_LON}"><ele>{ele}</ele></trkpt>'
        for i, ele in enumerate(elevations)
    )
    path.write_text(
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">\n'
        f'<trk><name>{path.stem}</name><trkseg>\n{points}\n</trkseg></trk>\n</gpx>\n',
        encoding="utf-8",
    )


@pytest.fixture
def gpx_dir(tmp_path):
    directory = tmp_path / "tracks"
    directory.mkdir()
    _write_gpx(directory / "bakkeby.gpx", profile(400, (30, 30), (60, -15)))
    _write_gpx(directory / "flat.gpx", [300.0] * 60)
    return directory


def _catalog(raw=None, error=None):
    catalog = Mock()
    if error:
        catalog.fetch_raw_tours.side_effect = error
    else:
        catalog.fetch_raw_tours.return_value = raw or []
    return catalog


def _raw_tour():
    return {'id': 5, 'name': 'Blåmann', 'place': 'Kvaløya', 'ates': 2,
            'coordinates': catalog_coordinates(profile(1400, (8, -100)))}


def test_run_combines_tracks_and_tours(gpx_dir, tmp_path, capsys):
    out = tmp_path / "out.json"
    results = cli.run(gpx_dir=gpx_dir, out_path=out, area=AREA, catalog=_catalog([_raw_tour()]))

    assert sorted(r.route_name for r in results) == ['Blåmann', 'bakkeby']
    written = json.loads(out.read_text(encoding="utf-8"))
    assert [d['name'] for d in written] == [r.route_name for r in results]
    assert "BEST SKI RUNS" in capsys.readouterr().out


def test_gpx_only_skips_catalog(gpx_dir, tmp_path):
    catalog = _catalog([_raw_tour()])
    results = cli.run(gpx_only=True, gpx_dir=gpx_dir, out_path=tmp_path / "out.json", catalog=catalog)
    assert [r.route_name for r in results] == ['bakkeby']
    catalog.fetch_raw_tours.assert_not_called()


def test_failing_catalog_still_writes_results(tmp_path):
    out = tmp_path / "out.json"
    results = cli.run(tours_only=True, out_path=out, catalog=_catalog(error=CatalogError("offline")))
    assert results == []
    assert json.loads(out.read_text(encoding="utf-8")) == []


def test_malformed_catalog_entries_keep_local_tracks(gpx_dir, tmp_path):
    pages = [
        '<script type="module" src="/assets/index.abc123.js"></script>',
        'import("./tours.def456.js")',
        'const e=JSON.parse(`[{"id":1,"coordinates":7},"oops"]`);export{e as default}',
    ]
    session = Mock()
    session.get.side_effect = [Mock(text=text) for text in pages]
    out = tmp_path / "out.json"

    results = cli.run(gpx_dir=gpx_dir, out_path=out, area=AREA, catalog=ToppturCatalog(session=session))

    assert [r.route_name for r in results] == ['bakkeby']
    assert [d['name'] for d in json.loads(out.read_text(encoding="utf-8"))] == ['bakkeby']


def test_missing_track_dir_is_fatal_only_for_gpx_only(tmp_path):
    missing = tmp_path / "nowhere"
    with pytest.raises(TrackSourceError):
        cli.run(gpx_only=True, gpx_dir=missing, out_path=tmp_path / "out.json")

    results = cli.run(gpx_dir=missing, out_path=tmp_path / "out.json", area=AREA, catalog=_catalog([_raw_tour()]))
    assert [r.route_name for r in results] == ['Blåmann']


def test_invalid_rating_system_is_rejected(tmp_path):
    system = RatingSystem.create({'steep_min_deg': 40})
    with pytest.raises(ValueError, match="steep band"):
        cli.run(system=system, out_path=tmp_path / "out.json", catalog=_catalog())


def test_cli_passes_options(monkeypatch):
    run = Mock(return_value=[])
    monkeypatch.setattr(cli, "run", run)
    result = CliRunner().invoke(cli.app, ["--gpx-only", "--top", "5"])
    assert result.exit_code == 0
    run.assert_called_once_with(gpx_only=True, tours_only=False, top_n=5)


def test_cli_exits_non_zero_on_fatal_error(monkeypatch):
    monkeypatch.setattr(cli, "run", Mock(side_effect=TrackSourceError("Track directory not found: tracks")))
    result = CliRunner().invoke(cli.app, ["--gpx-only"])
    assert result.exit_code == 1


def test_cli_rejects_non_positive_top():
    assert CliRunner().invoke(cli.app, ["--top", "0"]).exit_code != 0
