import pytest

from config import ChashConfig
from errors import ConfigError
from run import main


@pytest.fixture
def inputs(tmp_path):
    ups = tmp_path / "upstreams.list"
    ups.write_text("a.example.com:80,1\nb.example.com:80,1\n")
    keys = tmp_path / "hashkeys.list"
    keys.write_text("\n".join(f"key-{i}" for i in range(200)) + "\n")
    return str(ups), str(keys)


def test_report(inputs, capsys):
    ups, keys = inputs
    assert main(["--upstreams-file", ups, "--hashkeys-file", keys]) == 0

    out = capsys.readouterr().out
    assert "Begin Of Statistic Result" in out
    assert "End Of Statistic Result" in out
    rows = [line for line in out.splitlines() if line.startswith("ID:")]
    assert rows[0].startswith("ID:   0 Server: a.example.com:80")
    assert sum(int(r.split("HitCount:")[1].split()[0]) for r in rows) == 200


def test_report_is_reproducible(inputs, capsys):
    ups, keys = inputs
    argv = ["--upstreams-file", ups, "--hashkeys-file", keys, "--output-sort-key", "hitCount"]
    main(argv)
    first = capsys.readouterr().out
    main(argv)
    assert capsys.readouterr().out == first


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert capsys.readouterr().out.strip() == "Version: 1.0"


def test_missing_input_file(tmp_path, capsys):
    assert main(["--upstreams-file", str(tmp_path / "nope"), "--hashkeys-file", str(tmp_path / "nope")]) == 1
    assert "no such file" in capsys.readouterr().err


def test_invalid_sort_key(inputs, capsys):
    ups, keys = inputs
    assert main(["--upstreams-file", ups, "--hashkeys-file", keys, "--output-sort-key", "weight"]) == 1
    assert "not a valid SortKey" in capsys.readouterr().err


def test_only_comments_prints_no_statistics(inputs, tmp_path, capsys):
    ups, _ = inputs
    keys = tmp_path / "comments.list"
    keys.write_text("# nothing\n\n#\n")
    assert main(["--upstreams-file", ups, "--hashkeys-file", str(keys)]) == 1
    assert "Statistic Result" not in capsys.readouterr().out


def test_config_validate(inputs):
    ups, keys = inputs
    cfg = ChashConfig(upstreams_file=ups, hashkeys_file=keys)
    assert cfg.validate() is cfg
    assert cfg.input_files == (ups, keys)
    with pytest.raises(ConfigError):
        ChashConfig(upstreams_file=ups, hashkeys_file=keys, sort_key="bogus").validate()


def test_verbose_output_stays_between_banners(inputs, capsys):
    ups, keys = inputs
    assert main(["--upstreams-file", ups, "--hashkeys-file", keys, "--verbose"]) == 0

    out = capsys.readouterr().out
    begin = out.index("Begin Of Verbose Output")
    end = out.index("End Of Verbose Output")
    assert begin < out.index("server: a.example.com:80") < end
    assert begin < out.index("hash: ") < end
    assert begin < out.index("Match HashKey: key-0") < end
    assert end < out.index("Begin Of Statistic Result")


def test_directory_as_input_file(inputs, tmp_path, capsys):
    _, keys = inputs
    assert main(["--upstreams-file", str(tmp_path), "--hashkeys-file", keys]) == 1
    assert "not a regular file" in capsys.readouterr().err


def test_key_with_non_utf8_bytes_is_counted(inputs, tmp_path, capsys):
    ups, _ = inputs
    keys = tmp_path / "latin1.list"
    keys.write_bytes(b"/caf\xe9\n/na\xefve\nplain\n")
    assert main(["--upstreams-file", ups, "--hashkeys-file", str(keys)]) == 0
    rows = [line for line in capsys.readouterr().out.splitlines() if line.startswith("ID:")]
    assert sum(int(r.split("HitCount:")[1].split()[0]) for r in rows) == 3
