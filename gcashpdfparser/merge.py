"""Pair header records with numeric records by position."""

import logging
from typing import List, Sequence, Tuple

from .models import HeaderRecord, NumericRecord, Transaction

logger = logging.getLogger(__name__)


def merge_records(
  headers: Sequence[HeaderRecord], numerics: Sequence[NumericRecord]
) -> Tuple[List[Transaction], bool]:
  """Zip the i-th header record with the i-th numeric record.

  Returns the transactions and whether the two sequences had different
  lengths. Trailing records of the longer sequence are dropped; no attempt is
  made to realign by content.
  """
  count = min(len(headers), len(numerics))
  transactions = [
    Transaction(
      date_time=header.date_time,
      description=header.description,
      reference_no=header.reference_no,
      debit=numeric.debit,
      credit=numeric.credit,
      balance=numeric.balance,
    )
    for header, numeric in zip(headers[:count], numerics[:count])
  ]

  mismatch = len(headers) != len(numerics)
  if mismatch:
    logger.warning(
      f"The number of header entries ({len(headers)}) does not match the number "
      f"of numeric entries ({len(numerics)}). Keeping the first {count}."
    )
  return transactions, mismatch
