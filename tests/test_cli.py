from click.testing import CliRunner

from createdat.cli import build_config, main
from createdat.config import Position, TimeStyle

from conftest import touch


def run(tmp_path, *args):
    return CliRunner().invoke(main, ["-S", str(tmp_path / "src"), "-F", str(tmp_path / "out"), *args])


def make_source(tmp_path, *names):
    src = tmp_path / "src"
    src.mkdir()
    for n in names:
        touch(src, n)
    return src


def test_default_run_copies_images(tmp_path, fixed_time):
    make_source(tmp_path, "photo.jpg", "notes.txt")
    result = run(tmp_path)
    assert result.exit_code == 0, result.output
    assert [p.name for p in (tmp_path / "out").iterdir()] == ["photo-2024-07-17_14-30-00.jpg"]
    assert "Copied : 1" in result.output
    assert f"[COPY] photo.jpg -> {tmp_path / 'out' / 'photo-2024-07-17_14-30-00.jpg'}" in result.output


def test_preview_lists_and_writes_nothing(tmp_path, fixed_time):
    make_source(tmp_path, "photo.jpg")
    result = run(tmp_path, "-p", "-n", "-d", "IMG")
    assert result.exit_code == 0, result.output
    assert "[DRYRUN] photo.jpg  ->  IMG-2024-07-17.jpg" in result.output
    assert not (tmp_path / "out").exists()


def test_collisions_in_cli(tmp_path, fixed_time):
    make_source(tmp_path, "a.jpg", "b.jpg")
    result = run(tmp_path, "-n", "-d", "-f")
    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in (tmp_path / "out").iterdir()) == ["2024-07-17-1.jpg", "2024-07-17.jpg"]


def test_extension_option(tmp_path, fixed_time):
    make_source(tmp_path, "a.jpg", "b.txt", "c.md")
    result = run(tmp_path, "-e", ".txt,md", "-d")
    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in (tmp_path / "out").iterdir()) == ["b-2024-07-17.txt", "c-2024-07-17.md"]


def test_custom_format(tmp_path, fixed_time):
    make_source(tmp_path, "a.jpg")
    result = run(tmp_path, "-p", "-n", "--format", "%a %b %e %Y")
    assert result.exit_code == 0, result.output
    assert "a.jpg  ->  Wed Jul 17 2024.jpg" in result.output


def test_invalid_format_exits_nonzero(tmp_path, fixed_time):
    make_source(tmp_path, "a.jpg")
    result = run(tmp_path, "--format", "%Y-%Q")
    assert result.exit_code == 1
    assert "%Q" in result.output
    assert not (tmp_path / "out").exists()


def test_no_images_exits_nonzero(tmp_path, fixed_time):
    make_source(tmp_path, "a.txt")
    result = run(tmp_path)
    assert result.exit_code == 1
    assert "--all" in result.output
    assert not (tmp_path / "out").exists()


def test_partial_failure_exits_nonzero(tmp_path, fixed_time):
    make_source(tmp_path, "a.jpg", "b.jpg")
    out = tmp_path / "out"
    out.mkdir()
    touch(out, "a-2024-07-17_14-30-00.jpg", b"old")
    result = run(tmp_path)
    assert result.exit_code == 1
    assert "Copied : 1" in result.output
    assert "Failed : 1" in result.output
    assert (out / "b-2024-07-17_14-30-00.jpg").exists()


def test_target_folder_cannot_be_created(tmp_path, fixed_time):
    make_source(tmp_path, "a.jpg")
    touch(tmp_path, "blocker")
    result = CliRunner().invoke(main, ["-S", str(tmp_path / "src"), "-F", str(tmp_path / "blocker" / "x")])
    assert result.exit_code == 1
    assert "Could not create target folder" in result.output


def test_build_config_flags():
    config = build_config("  trip ", ("jpg,PNG",), front=True, no_name=True, twelve=True,
                          date_only=False, space=True, date_format=None, suffix=True, all_files=False)
    assert config.custom_name == "trip"
    assert config.extension_filter == frozenset({"jpg", "png"})
    assert config.position is Position.PREFIX
    assert config.time_style is TimeStyle.TWELVE_HOUR
    assert config.time_separator == " "
    assert not config.keep_original_name
    assert config.custom_name_after_date


def test_date_flag_wins_over_twelve():
    config = build_config(None, (), False, False, True, True, False, None, False, False)
    assert config.time_style is TimeStyle.NONE


def test_move_reports_each_file(tmp_path, fixed_time):
    src = make_source(tmp_path, "a.jpg")
    result = run(tmp_path, "-m", "-d")
    assert result.exit_code == 0, result.output
    assert "[MOVE] a.jpg -> " in result.output
    assert "Moved  : 1" in result.output
    assert list(src.iterdir()) == []


def test_dotfile_with_all(tmp_path, fixed_time):
    make_source(tmp_path, ".gitignore")
    result = run(tmp_path, "-a")
    assert result.exit_code == 0, result.output
    assert [p.name for p in (tmp_path / "out").iterdir()] == ["2024-07-17_14-30-00.gitignore"]
