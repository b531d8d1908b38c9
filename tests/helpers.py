from fpdf import FPDF

from gcashpdfparser.fragments import Fragment

# Header cell x positions used by the synthetic statement pages.
# Boundaries: 90, 240, 380, 460, 520 -> Debit [380, 460), Credit [460, 520), Balance [520, inf)
HEADER_X = {
  'Date and Time': 30.0,
  'Description': 150.0,
  'Reference No': 330.0,
  'Debit': 430.0,
  'Credit': 490.0,
  'Balance': 550.0,
}


def header_row(y=700.0):
  return [Fragment(name, x, y, 60.0, 10.0) for name, x in HEADER_X.items()]


def transaction_row(y, date_time, description, reference_no, debit='', credit='', balance=''):
  """Fragments of one statement line, in the order the PDF emits them.

  The whitespace-only fragments between the text cells are what puts three
  spaces between the fields once a page's fragments are space-joined.
  """
  fragments = [
    Fragment(date_time, 30.0, y, 100.0, 10.0),
    Fragment(' ', 140.0, y, 2.0, 10.0),
    Fragment(description, 150.0, y, 150.0, 10.0),
    Fragment(' ', 320.0, y, 2.0, 10.0),
    Fragment(reference_no, 330.0, y, 80.0, 10.0),
  ]
  for text, col in ((debit, 'Debit'), (credit, 'Credit'), (balance, 'Balance')):
    if text is not None:
      fragments.append(Fragment(text, HEADER_X[col], y, 40.0, 10.0))
  return fragments


def make_pdf(lines, user_password=None):
  pdf = FPDF()
  if user_password:
    pdf.set_encryption(owner_password='owner-secret', user_password=user_password)
  pdf.add_page()
  pdf.set_font('helvetica', size=12)
  for line in lines:
    pdf.cell(0, 10, line)
    pdf.ln(10)
  return bytes(pdf.output())


# Rows of the drawn statement: (date and time, description, reference, debit, credit, balance)
STATEMENT_ROWS = [
  ('2024-01-15 10:30 AM', 'Bill Payment to Meralco', '1234567890123', '500.00', '', '1200.50'),
  ('2024-01-16 2:05 PM', 'Received GCash', '1234567890124', '', '300.00', '1500.50'),
]


def make_statement_pdf(rows=STATEMENT_ROWS, user_password='secret'):
  """A one-page statement with every cell drawn on its own at its column's x."""
  pdf = FPDF(unit='pt')
  if user_password:
    pdf.set_encryption(owner_password='owner-secret', user_password=user_password)
  pdf.add_page()
  pdf.set_font('helvetica', size=9)
  pdf.text(30, 60, 'GCash Transaction History')
  # fpdf measures y from the top of the page
  for name, x in HEADER_X.items():
    pdf.text(x, 100, name)
  for idx, row in enumerate(rows):
    y = 130 + 20 * idx
    for text, x in zip(row, HEADER_X.values()):
      if text:
        pdf.text(x, y, text)
  return bytes(pdf.output())
