#!/usr/bin/env python3
"""
GPML to WikiPathways RDF Converter
==================================

Converts GPML pathway diagrams (GPML 2021 or 2013a) into the WikiPathways
semantic interaction graph.

Usage:
    gpml2wprdf <gpml_file_or_dir> <output_dir> [options]

Examples:
    gpml2wprdf WP4846.gpml ./rdf
    gpml2wprdf ./gpml ./rdf --format json
    gpml2wprdf pathway.gpml ./rdf --wp-id WP4846 --revision 120000
"""
import argparse
import logging
import os
import sys
from pathlib import Path

from gpml2wprdf.build_functions.pathway_converter_core import PathwayConverter
from gpml2wprdf.config import ConversionConfig, OUTPUT_FORMATS
from gpml2wprdf.errors import GPMLParseError
from gpml2wprdf.object2wprdf.wprdf_writer import WPRDFWriter
from gpml2wprdf.parsing_functions.parsing_utils import GPMLParser
from gpml2wprdf.validation.resolution_report import ResolutionReport, print_report, print_summary

logger = logging.getLogger(__name__)

OUTPUT_EXTENSIONS = {'turtle': '.ttl', 'json': '.json'}


def find_gpml_files(path):
    """Return the GPML file itself, or every .gpml file below a directory."""
    path = Path(path)
    if path.is_file():
        return [path]
    return sorted(path.rglob("*.gpml"))


def convert_file(gpml_file, output_dir, output_format='turtle', domain=None, wp_id=None, revision=None):
    """
    Convert one GPML file and write the result next to the others.

    Args:
        gpml_file (Path): GPML file to convert
        output_dir (str): Directory for the output file
        output_format (str): 'turtle' or 'json'
        domain (str): Base IRI for minted resources (optional)
        wp_id (str): WikiPathways id override (optional)
        revision (str): Revision override (optional)

    Returns:
        ResolutionReport: parsed is False when the file could not be read
    """
    report = ResolutionReport(file_path=str(gpml_file))
    try:
        pathway = GPMLParser().parse_file(str(gpml_file))
    except (GPMLParseError, FileNotFoundError) as e:
        logger.error("Could not parse %s: %s", gpml_file, e)
        report.parsed = False
        return report

    config = ConversionConfig.for_pathway(
        pathway, wp_id=wp_id, revision=revision, base_iri=domain, file_name=gpml_file.name
    )
    result = PathwayConverter(pathway, config, report).convert()

    writer = WPRDFWriter(config)
    output_file = os.path.join(output_dir, gpml_file.stem + OUTPUT_EXTENSIONS[output_format])
    if output_format == 'json':
        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(writer.write_json(result, pathway))
    else:
        writer.write_file(result, pathway, output_file)

    logger.info("Wrote %s", output_file)
    return report


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Convert GPML pathway diagrams into WikiPathways RDF'
    )
    parser.add_argument('input', help='GPML file or directory of GPML files')
    parser.add_argument('output_dir', help='Directory for the converted files')
    parser.add_argument(
        '--domain', type=str,
        help='Base IRI for minted resources (default: $GPML2WPRDF_BASE_IRI or https://rdf.wikipathways.org)'
    )
    parser.add_argument('--revision', type=str, help='Pathway revision used in IRIs')
    parser.add_argument('--wp-id', type=str, help='WikiPathways id used in IRIs (single file only)')
    parser.add_argument(
        '--format', choices=OUTPUT_FORMATS, default='turtle',
        help='Output format (default: turtle)'
    )
    parser.add_argument('--verbose', '-v', action='store_true', help='Print a report for every file')

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if not os.path.exists(args.input):
        print(f"Error: '{args.input}' is not a file or directory")
        return 1

    gpml_files = find_gpml_files(args.input)
    if not gpml_files:
        print(f"Error: No .gpml files found in {args.input}")
        return 1
    if args.wp_id and len(gpml_files) > 1:
        parser.error("--wp-id can only be used with a single GPML file")

    os.makedirs(args.output_dir, exist_ok=True)

    print("=" * 60)
    print("GPML to WikiPathways RDF Converter")
    print("=" * 60)
    print(f"Input: {args.input} ({len(gpml_files)} file(s))")
    print(f"Output directory: {args.output_dir}")
    print(f"Format: {args.format}")

    reports = []
    for i, gpml_file in enumerate(gpml_files, 1):
        if i % 50 == 0:
            print(f"  Progress: {i}/{len(gpml_files)} ({i*100//len(gpml_files)}%)")
        report = convert_file(
            gpml_file, args.output_dir, args.format,
            domain=args.domain, wp_id=args.wp_id, revision=args.revision
        )
        reports.append(report)
        if args.verbose or len(gpml_files) == 1:
            print_report(report)

    print_summary(reports)

    return 1 if any(not r.parsed for r in reports) else 0


if __name__ == "__main__":
    sys.exit(main())
