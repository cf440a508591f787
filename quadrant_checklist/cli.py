"""
CLI entry points for checklist to quadrant page conversion.
"""

# Standard Library
import argparse
import dataclasses
import pathlib
import sys
import time

# local repo modules
import quadrant_checklist as qc
import quadrant_checklist.config
import quadrant_checklist.debounce
import quadrant_checklist.deeplink
import quadrant_checklist.lexicon
import quadrant_checklist.list_parser
import quadrant_checklist.measure
import quadrant_checklist.pack
import quadrant_checklist.render
import quadrant_checklist.snapshot


IconLexicon = qc.lexicon.IconLexicon
RenderConfig = qc.config.RenderConfig
Debouncer = qc.debounce.Debouncer
SnapshotError = qc.snapshot.SnapshotError

TEXT_SIZE_PRESETS = qc.config.TEXT_SIZE_PRESETS
DEFAULT_TEXT_SIZE = qc.config.DEFAULT_TEXT_SIZE
DEFAULT_MARGIN = qc.config.DEFAULT_MARGIN
DEFAULT_GUTTER = qc.config.DEFAULT_GUTTER
DEFAULT_QUADRANT_LEAKAGE = qc.config.DEFAULT_QUADRANT_LEAKAGE
DEFAULT_ICON_MAP_PATH = qc.config.DEFAULT_ICON_MAP_PATH
SAMPLE_LIST_PATH = qc.config.SAMPLE_LIST_PATH
SNAPSHOT_DPI = qc.config.SNAPSHOT_DPI
DEBOUNCE_SECONDS = qc.config.DEBOUNCE_SECONDS
WATCH_POLL_SECONDS = qc.config.WATCH_POLL_SECONDS


#============================================
def build_render_config(args: argparse.Namespace) -> RenderConfig:
	"""
	Build render config from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		RenderConfig.
	"""
	text_size = TEXT_SIZE_PRESETS[args.text_size]
	geometry = qc.config.build_geometry(
		text_size,
		margin=qc.config.inches_to_points(args.margin),
		gutter=qc.config.inches_to_points(args.gutter),
		quadrant_leakage=tuple(args.leakage),
	)
	icon_dir = None
	if args.icon_dir is not None:
		icon_dir = pathlib.Path(args.icon_dir)
	return RenderConfig(
		geometry=geometry,
		text_size=text_size,
		icon_dir=icon_dir,
		draw_fold_lines=args.draw_fold_lines,
		draw_outlines=args.draw_outlines,
	)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Optional argument list, defaults to sys.argv.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Print a checklist as four quadrants on one Letter page.")

	input_group = parser.add_argument_group("Input")
	source_group = input_group.add_mutually_exclusive_group(required=True)
	source_group.add_argument("-i", "--input", dest="input_path", default=None, help="List text file, or - for stdin.")
	source_group.add_argument("-s", "--sample", dest="use_sample", action="store_true", help="Use the bundled sample list.")
	source_group.add_argument("-k", "--link", dest="link", default=None, help="Deep link with #text=...&autoprint=1.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", required=True, help="Output PDF path.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")
	output_group.add_argument("-x", "--snapshot", dest="snapshot_path", default=None, help="Also write a raster snapshot PDF.")
	output_group.add_argument("--snapshot-dpi", dest="snapshot_dpi", type=int, default=SNAPSHOT_DPI, help="Snapshot resolution.")

	icon_group = parser.add_argument_group("Icons")
	icon_group.add_argument("-j", "--icon-map", dest="icon_map_path", default=str(DEFAULT_ICON_MAP_PATH), help="Icon map JSON path.")
	icon_group.add_argument("-I", "--icon-dir", dest="icon_dir", default=None, help="Directory of <key>.png icons.")
	icon_group.add_argument("-w", "--whitelist", dest="enforce_canonical", action="store_true", help="Only use canonical icon keys.")
	icon_group.add_argument("-W", "--no-whitelist", dest="enforce_canonical", action="store_false", help="Accept any derived icon key.")

	layout_group = parser.add_argument_group("Layout")
	layout_group.add_argument("-t", "--text-size", dest="text_size", choices=sorted(TEXT_SIZE_PRESETS), default=DEFAULT_TEXT_SIZE, help="Text size preset.")
	layout_group.add_argument("--margin", dest="margin", type=float, default=DEFAULT_MARGIN / qc.config.POINTS_PER_INCH, help="Page margin in inches.")
	layout_group.add_argument("--gutter", dest="gutter", type=float, default=DEFAULT_GUTTER / qc.config.POINTS_PER_INCH, help="Fold gutter in inches.")
	layout_group.add_argument(
		"--leakage",
		dest="leakage",
		type=float,
		nargs=4,
		metavar=("TL", "TR", "BL", "BR"),
		default=list(DEFAULT_QUADRANT_LEAKAGE),
		help="Per-quadrant height compensation in points.",
	)
	layout_group.add_argument("-f", "--fold-lines", dest="draw_fold_lines", action="store_true", help="Draw fold guide lines.")
	layout_group.add_argument("-F", "--no-fold-lines", dest="draw_fold_lines", action="store_false", help="Disable fold guide lines.")
	layout_group.add_argument("-d", "--draw-outlines", dest="draw_outlines", action="store_true", help="Draw quadrant outlines.")
	layout_group.add_argument("-D", "--no-draw-outlines", dest="draw_outlines", action="store_false", help="Disable quadrant outlines.")

	watch_group = parser.add_argument_group("Watch")
	watch_group.add_argument("--watch", dest="watch", action="store_true", help="Re-render whenever the input file changes.")
	watch_group.add_argument("--debounce", dest="debounce", type=float, default=DEBOUNCE_SECONDS, help="Quiet period in seconds before re-rendering.")

	parser.set_defaults(
		enforce_canonical=None,
		draw_fold_lines=True,
		draw_outlines=False,
		watch=False,
	)

	args = parser.parse_args(argv)
	if args.watch and (args.input_path is None or args.input_path == "-"):
		parser.error("--watch needs an input file")
	return args


#============================================
def load_source_text(args: argparse.Namespace) -> tuple[str, bool]:
	"""
	Read the list text selected on the command line.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Tuple of (text, autoprint requested).
	"""
	if args.link is not None:
		link = qc.deeplink.parse_deep_link(args.link)
		return (link.text or "", link.autoprint)
	if args.use_sample:
		return (SAMPLE_LIST_PATH.read_text(encoding="utf-8"), False)
	if args.input_path == "-":
		return (sys.stdin.read(), False)
	return (pathlib.Path(args.input_path).read_text(encoding="utf-8"), False)


#============================================
def load_icon_lexicon(args: argparse.Namespace) -> IconLexicon:
	"""
	Load the icon lexicon, printing a notice when it is unavailable.

	Args:
		args: Parsed argparse namespace.

	Returns:
		IconLexicon, empty on failure.
	"""
	lexicon, warning = qc.lexicon.load_lexicon(
		pathlib.Path(args.icon_map_path),
		args.enforce_canonical,
	)
	if warning is not None:
		print(f"Warning: {warning}")
	else:
		print(f"Icon map: {len(lexicon.canonical)} keys, {len(lexicon.synonyms)} synonyms")
	return lexicon


#============================================
def render_text(
	text: str,
	args: argparse.Namespace,
	config: RenderConfig,
	lexicon: IconLexicon,
	take_snapshot: bool,
) -> None:
	"""
	Run parse, pack and render for one version of the list text.

	Args:
		text: List text.
		args: Parsed argparse namespace.
		config: Render configuration.
		lexicon: Icon lexicon.
		take_snapshot: Write the snapshot PDF after rendering.
	"""
	start_time = time.perf_counter()
	model = qc.list_parser.parse_list(text)
	item_count = qc.list_parser.count_items(model.sections)
	print(f"Title: {model.title}")
	print(f"Sections: {len(model.sections)} ({item_count} unchecked items)")
	geometry = qc.measure.fit_title_block(config.geometry, model.title, config.text_size)
	config = dataclasses.replace(config, geometry=geometry)

	pack_start = time.perf_counter()
	measure_fn = qc.measure.make_measure_fn(config.geometry.column_width, config.text_size)
	pack_result = qc.pack.pack_sections(model.sections, measure_fn, config.geometry)
	pack_end = time.perf_counter()
	for name, sections in zip(qc.config.QUADRANT_NAMES, pack_result.quadrants):
		names = ", ".join(section.name for section in sections) or "-"
		print(f"  {name}: {names}")
	if pack_result.dropped_items > 0:
		print(f"Warning: {pack_result.dropped_items} items did not fit on the page and were left out")

	output_path = pathlib.Path(args.output_path)
	render_start = time.perf_counter()
	result = qc.render.render_checklist_pdf(model, pack_result, output_path, config, lexicon)
	render_end = time.perf_counter()
	print(f"Items printed: {result.items_drawn}")
	print(f"Icons drawn: {result.icons_drawn}")
	if result.icons_missing > 0:
		print(f"Icons without assets: {result.icons_missing}")
	print(f"PDF written: {output_path}")

	manifest_path = args.manifest_path
	if manifest_path is None:
		manifest_path = f"{output_path}.json"
	qc.render.write_manifest(pathlib.Path(manifest_path), model, pack_result, result, config)
	print(f"Manifest written: {manifest_path}")

	if take_snapshot:
		snapshot_path = args.snapshot_path
		if snapshot_path is None:
			snapshot_path = str(output_path.with_name(f"{output_path.stem}_snapshot.pdf"))
		try:
			qc.snapshot.snapshot_pdf(output_path, pathlib.Path(snapshot_path), args.snapshot_dpi)
		except SnapshotError as error:
			print(f"Snapshot failed: {error}")
		else:
			print(f"Snapshot written: {snapshot_path}")

	total_time = time.perf_counter() - start_time
	print(
		"Timing: pack={:.2f}s render={:.2f}s total={:.2f}s".format(
			pack_end - pack_start,
			render_end - render_start,
			total_time,
		)
	)


#============================================
def poll_input_change(
	input_path: pathlib.Path,
	last_mtime: int | None,
	debouncer: Debouncer,
) -> int | None:
	"""
	Schedule the input text when its modification time has changed.

	The file can vanish between stat and read while an editor saves by
	replacing it; that change is picked up on a later poll.

	Args:
		input_path: Watched list file.
		last_mtime: Modification time already scheduled.
		debouncer: Debouncer receiving the text.

	Returns:
		Modification time to compare against on the next poll.
	"""
	try:
		mtime = input_path.stat().st_mtime_ns
	except FileNotFoundError:
		return last_mtime
	if mtime == last_mtime:
		return last_mtime
	try:
		text = input_path.read_text(encoding="utf-8")
	except FileNotFoundError:
		return last_mtime
	debouncer.schedule(text)
	return mtime


#============================================
def watch_input(
	args: argparse.Namespace,
	config: RenderConfig,
	lexicon: IconLexicon,
) -> None:
	"""
	Re-render whenever the input file changes, debounced.

	Args:
		args: Parsed argparse namespace.
		config: Render configuration.
		lexicon: Icon lexicon.
	"""
	input_path = pathlib.Path(args.input_path)
	debouncer = Debouncer(args.debounce)
	last_mtime = None
	print(f"Watching: {input_path}")
	while True:
		last_mtime = poll_input_change(input_path, last_mtime, debouncer)
		text = debouncer.poll()
		if text is not None:
			render_text(text, args, config, lexicon, args.snapshot_path is not None)
		time.sleep(WATCH_POLL_SECONDS)


#============================================
def run_pipeline(args: argparse.Namespace) -> None:
	"""
	Run the full pipeline from list text to the quadrant PDF.

	Args:
		args: Parsed argparse namespace.
	"""
	print("Checklist to quadrant page pipeline")
	print(f"Output PDF: {args.output_path}")
	print(f"Text size: {args.text_size}")
	print(f"Fold lines: {args.draw_fold_lines}")
	print(f"Draw outlines: {args.draw_outlines}")

	config = build_render_config(args)
	lexicon = load_icon_lexicon(args)
	if args.watch:
		try:
			watch_input(args, config, lexicon)
		except KeyboardInterrupt:
			print()
			print("Stopped watching")
		return

	text, autoprint = load_source_text(args)
	take_snapshot = args.snapshot_path is not None or autoprint
	render_text(text, args, config, lexicon, take_snapshot)


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	run_pipeline(args)
