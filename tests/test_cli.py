import json
import pathlib

import quadrant_checklist.cli as cli


#============================================
def test_sample_run_writes_pdf_and_manifest(tmp_path: pathlib.Path, capsys) -> None:
	"""
	The bundled sample renders end to end.
	"""
	output_pdf = tmp_path / "sample.pdf"
	cli.main(["--sample", "-o", str(output_pdf)])
	assert output_pdf.exists()
	manifest = json.loads(pathlib.Path(f"{output_pdf}.json").read_text(encoding="utf-8"))
	assert manifest["title"] == "Weekend Groceries"
	names = [
		section["name"]
		for quadrant in manifest["quadrants"]
		for section in quadrant["sections"]
	]
	assert names[0] == "Produce"
	assert "Household" in names
	output = capsys.readouterr().out
	assert "PDF written" in output


#============================================
def test_deep_link_autoprint_writes_snapshot(tmp_path: pathlib.Path) -> None:
	"""
	An autoprint deep link also produces the snapshot PDF.
	"""
	output_pdf = tmp_path / "link.pdf"
	cli.main([
		"--link",
		"#text=Trip%0A-%20milk&autoprint=1",
		"-o",
		str(output_pdf),
		"--snapshot-dpi",
		"72",
	])
	assert output_pdf.exists()
	assert (tmp_path / "link_snapshot.pdf").exists()


#============================================
def test_bad_icon_map_is_not_fatal(tmp_path: pathlib.Path, capsys) -> None:
	"""
	A broken icon map prints a warning and still renders.
	"""
	source = tmp_path / "list.md"
	source.write_text("Trip\n- milk\n", encoding="utf-8")
	icon_map = tmp_path / "icon-map.json"
	icon_map.write_text("{oops", encoding="utf-8")
	output_pdf = tmp_path / "out.pdf"
	manifest_path = tmp_path / "manifest.json"
	cli.main([
		"-i",
		str(source),
		"-o",
		str(output_pdf),
		"-m",
		str(manifest_path),
		"-j",
		str(icon_map),
		"--text-size",
		"large",
	])
	assert output_pdf.exists()
	data = json.loads(manifest_path.read_text(encoding="utf-8"))
	assert data["icon_keys"] == {"milk": "milk"}
	assert "Warning: Could not load icon map" in capsys.readouterr().out


#============================================
def test_poll_input_change_schedules_new_text(tmp_path: pathlib.Path) -> None:
	"""
	A changed file is read and handed to the debouncer once.
	"""
	source = tmp_path / "list.md"
	source.write_text("Trip\n- milk\n", encoding="utf-8")
	debouncer = cli.Debouncer(0.0)
	mtime = cli.poll_input_change(source, None, debouncer)
	assert mtime == source.stat().st_mtime_ns
	assert debouncer.poll() == "Trip\n- milk\n"
	assert cli.poll_input_change(source, mtime, debouncer) == mtime
	assert not debouncer.pending


#============================================
def test_poll_input_change_survives_file_replaced_during_read(tmp_path: pathlib.Path, monkeypatch) -> None:
	"""
	A file that disappears between stat and read is retried on a later poll.
	"""
	source = tmp_path / "list.md"
	source.write_text("Trip\n- milk\n", encoding="utf-8")

	def vanished(self, *args, **kwargs):
		raise FileNotFoundError(str(self))

	monkeypatch.setattr(pathlib.Path, "read_text", vanished)
	debouncer = cli.Debouncer(0.0)
	assert cli.poll_input_change(source, None, debouncer) is None
	assert not debouncer.pending

	monkeypatch.undo()
	mtime = cli.poll_input_change(source, None, debouncer)
	assert mtime == source.stat().st_mtime_ns
	assert debouncer.pending


#============================================
def test_poll_input_change_ignores_missing_file(tmp_path: pathlib.Path) -> None:
	"""
	A missing file keeps the previous modification time.
	"""
	debouncer = cli.Debouncer(0.0)
	assert cli.poll_input_change(tmp_path / "gone.md", 42, debouncer) == 42
	assert not debouncer.pending
