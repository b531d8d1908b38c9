import argparse
import logging
import os
import sys

from .config import ParserOptions
from .exceptions import PDFParseError
from .fragments import BACKENDS
from .parser import GCashPDFParser


class _ArgumentParser(argparse.ArgumentParser):
  def error(self, message):
    self.print_usage(sys.stderr)
    self.exit(1, f'{self.prog}: error: {message}\n')


def build_arg_parser():
  parser = _ArgumentParser(prog='gcash-pdf-parser',
                           description='Extract GCash transactions from a PDF statement')
  parser.add_argument('pdf_path', help='Input PDF file')
  parser.add_argument('password', help='Password of the PDF')
  parser.add_argument('output_dir', nargs='?', default='output', help='Output directory (default: output)')
  parser.add_argument('--debug', action='store_true', help='Write raw fragments, page texts and column positions')
  parser.add_argument('--backend', choices=BACKENDS, default='pymupdf', help='PDF text extraction backend')
  parser.add_argument('--excel', action='store_true', help='Also write an .xlsx file')
  parser.add_argument('--row-tolerance', type=float, default=5.0, help='Vertical tolerance for row clustering')
  parser.add_argument('--header-tolerance', type=float, default=2.0, help='Vertical tolerance for the header row')
  return parser


def main(argv=None):
  args = build_arg_parser().parse_args(argv)
  logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO,
                      format='%(levelname)s | %(message)s')

  print(f'Processing PDF file: {args.pdf_path}')
  print(f'Output directory: {args.output_dir}')

  try:
    with open(args.pdf_path, 'rb') as f:
      pdf_data = f.read()

    options = ParserOptions(
      output_dir=args.output_dir,
      debug=args.debug,
      row_tolerance=args.row_tolerance,
      header_tolerance=args.header_tolerance,
      backend=args.backend,
    )
    parser = GCashPDFParser(pdf_data, args.password, options)
    result = parser.parse()

    csv_path = parser.save_csv()
    print(f'CSV file has been generated: {csv_path}')
    if args.excel:
      print(f'Excel file has been generated: {parser.save_excel()}')
  except (OSError, ValueError, PDFParseError) as e:
    print(f'Error processing PDF: {e}', file=sys.stderr)
    return 1

  print(f'Extracted {len(result.transactions)} transactions from {len(result.page_texts)} pages')
  if result.count_mismatch:
    print(f'Warning: {result.header_count} header entries vs {result.numeric_count} numeric entries; '
          f'output truncated to {len(result.transactions)}')
  if args.debug:
    print(f'Check the {os.path.join(args.output_dir, "debug")} directory for extracted raw text')

  if result.page_texts:
    print('\nSample of first page text (first 200 characters):')
    print(result.page_texts[0][:200] + '...')
  return 0


if __name__ == '__main__':
  sys.exit(main())
