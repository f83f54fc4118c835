"""
CLI entry points for the git barcode sheet.
"""

# Standard Library
import argparse
import pathlib
import sys
import time

# local repo modules
import git_barcode_sheet as gbs
import git_barcode_sheet.commands
import git_barcode_sheet.config
import git_barcode_sheet.fonts
import git_barcode_sheet.render


COMMANDS = gbs.commands.COMMANDS
DEFAULT_OUTPUT = gbs.config.DEFAULT_OUTPUT
FontError = gbs.fonts.FontError


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, sys.argv[1:] when None.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(
		description="Render an A4 sheet of scannable git command barcodes.",
	)

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", default=DEFAULT_OUTPUT, help="Output PNG path.")
	output_group.add_argument("-p", "--pdf", dest="pdf_path", default=None, help="Also write an A4 PDF copy.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-q", "--quiet", dest="verbose", action="store_false", help="Only print the saved paths.")

	parser.set_defaults(verbose=True)

	args = parser.parse_args(argv)
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> gbs.config.SheetResult:
	"""
	Render the sheet and write every requested output.

	Args:
		args: Parsed argparse namespace.

	Returns:
		SheetResult for the rendered page.
	"""
	config = gbs.config.build_default_config()
	fonts = gbs.fonts.FontCache()
	if args.verbose:
		print("Git barcode sheet")
		print(f"Output PNG: {args.output_path}")
		if args.pdf_path:
			print(f"Output PDF: {args.pdf_path}")
		if args.manifest_path:
			print(f"Manifest: {args.manifest_path}")
		print(f"Commands: {len(COMMANDS)}")

	start_time = time.perf_counter()
	result = gbs.render.render_sheet(COMMANDS, config, fonts, verbose=args.verbose)
	render_end = time.perf_counter()
	if args.verbose:
		geometry = result.geometry
		print(f"Page: {geometry.width}x{geometry.height} px, {geometry.columns}x{geometry.rows} grid")
		print(f"Cells rendered: {result.rendered_cells}")
		print(f"Cells skipped: {result.failed_cells}")
		print(f"Footer rendered: {result.footer_rendered}")

	output_path = pathlib.Path(args.output_path)
	gbs.render.save_png(result.image, output_path, config.dpi)
	outputs = {"png": str(output_path)}
	print(f"Saved: {output_path}")

	if args.pdf_path:
		pdf_path = pathlib.Path(args.pdf_path)
		gbs.render.save_pdf(result.image, pdf_path, config.title)
		outputs["pdf"] = str(pdf_path)
		print(f"Saved: {pdf_path}")

	if args.manifest_path:
		manifest_path = pathlib.Path(args.manifest_path)
		gbs.render.write_manifest(manifest_path, outputs, result, config, fonts)
		if args.verbose:
			print(f"Manifest written: {manifest_path}")

	if args.verbose:
		total_time = time.perf_counter() - start_time
		print(
			"Timing: render={:.2f}s total={:.2f}s".format(
				render_end - start_time,
				total_time,
			)
		)
	return result


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	try:
		run_pipeline(args)
	except FontError as error:
		print(f"failed to load font: {error}", file=sys.stderr)
		raise SystemExit(1)
	except OSError as error:
		print(f"failed to save output: {error}", file=sys.stderr)
		raise SystemExit(1)
