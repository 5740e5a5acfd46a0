#!/usr/bin/env python3
"""
Command-line interface for flowcase.

Usage:
    flowcase generate login.mmd --output docs/testcases/login.md
    flowcase validate login.mmd
    flowcase format login.mmd --to json
"""

import argparse
import sys
from pathlib import Path

from .shared import FlowcaseError, ParseError
from .services.diagram_parsing import FlowchartParser, ParserOptions, to_json, to_mermaid, to_text
from .services.testcase_generation import TestCaseGenerationService

FORMATTERS = {
    'mermaid': lambda result, args: to_mermaid(result, include_styles=args.styles),
    'json': lambda result, args: to_json(result),
    'text': lambda result, args: to_text(result),
}


def _read_flowchart(path: str) -> str:
    try:
        return Path(path).read_text(encoding='utf-8')
    except OSError as e:
        raise FlowcaseError(f"Cannot read {path}: {e}") from e


def generate_command(args):
    """Generate Markdown test cases from a flowchart file"""
    try:
        service = TestCaseGenerationService()
        test_cases = service.generate_from_file(args.input, strict=not args.lenient)
        
        if not test_cases:
            print(f"⚠️ No execution paths found in {args.input}")
            return 1
        
        output = Path(args.output) if args.output else service.default_output_path(args.input)
        service.export_markdown(test_cases, output)
        
        error_paths = sum(1 for tc in test_cases if tc.is_error_path)
        print(f"✅ Generated {len(test_cases)} test cases from {args.input}")
        print(f"📊 {len(test_cases) - error_paths} normal paths, {error_paths} error paths")
        print(f"📁 Output: {output}")
        return 0
        
    except ParseError as e:
        print(f"❌ {args.input}: {e}")
        return 1
    except FlowcaseError as e:
        print(f"❌ Error: {e}")
        return 1


def validate_command(args):
    """Report every diagnostic in a flowchart file"""
    try:
        content = _read_flowchart(args.input)
        parser = FlowchartParser(ParserOptions.from_settings())
    except FlowcaseError as e:
        print(f"❌ Error: {e}")
        return 1

    diagnostics = parser.validate(content)
    errors = [d for d in diagnostics if d.is_error]
    
    for diagnostic in diagnostics:
        marker = "❌" if diagnostic.is_error else "⚠️"
        print(f"{marker} {diagnostic}")
    
    if errors:
        print(f"❌ {args.input}: {len(errors)} error(s), {len(diagnostics) - len(errors)} warning(s)")
        return 1
    
    print(f"✅ {args.input} is valid ({len(diagnostics)} warning(s))")
    return 0


def format_command(args):
    """Re-emit a flowchart file in canonical form"""
    try:
        content = _read_flowchart(args.input)
        parser = FlowchartParser(ParserOptions.from_settings(strict_mode=not args.lenient))
        result = parser.parse(content)
    except FlowcaseError as e:
        print(f"❌ Error: {e}")
        return 1
    
    print(FORMATTERS[args.to](result, args))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='flowcase',
        description='Generate end-to-end test cases from flowchart diagrams'
    )
    
    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    
    # Generate command
    generate_parser = subparsers.add_parser('generate', help='Generate Markdown test cases')
    generate_parser.add_argument('input', help='Path to a .mmd flowchart')
    generate_parser.add_argument('--output', '-o', help='Markdown output path')
    generate_parser.add_argument('--lenient', action='store_true', help='Collect parse errors instead of stopping')
    generate_parser.set_defaults(func=generate_command)
    
    # Validate command
    validate_parser = subparsers.add_parser('validate', help='Check a flowchart for errors')
    validate_parser.add_argument('input', help='Path to a flowchart file')
    validate_parser.set_defaults(func=validate_command)
    
    # Format command
    format_parser = subparsers.add_parser('format', help='Re-emit a flowchart')
    format_parser.add_argument('input', help='Path to a flowchart file')
    format_parser.add_argument('--to', choices=sorted(FORMATTERS), default='mermaid', help='Output format')
    format_parser.add_argument('--styles', action='store_true', help='Append style directives (mermaid only)')
    format_parser.add_argument('--lenient', action='store_true', help='Collect parse errors instead of stopping')
    format_parser.set_defaults(func=format_command)
    
    return parser


def main(argv=None):
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)
    
    if not args.command:
        parser.print_help()
        return 1
    
    try:
        return args.func(args)
    except KeyboardInterrupt:
        print("\n⚠️ Operation cancelled by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
