import math
import unittest

from gcashpdfparser.columns import (
  FALLBACK_COLUMNS,
  Column,
  ColumnModel,
  build_column_model,
  compute_column_boundaries,
)
from gcashpdfparser.fragments import Fragment
from helpers import header_row


class ColumnModelTest(unittest.TestCase):
  def assertPartitions(self, model):
    columns = list(model)
    self.assertEqual(columns[0].min_x, 0.0)
    self.assertTrue(math.isinf(columns[-1].max_x))
    for current, following in zip(columns, columns[1:]):
      self.assertLess(current.center_x, following.center_x)
      self.assertEqual(current.max_x, following.min_x)

  def test_header_row_detected(self):
    fragments = [Fragment('GCash Transaction History', 200, 780)] + header_row()
    model = build_column_model(fragments)
    self.assertFalse(model.used_fallback)
    self.assertEqual([c.name for c in model],
                     ['Date and Time', 'Description', 'Reference No', 'Debit', 'Credit', 'Balance'])
    self.assertEqual(model.get('Debit').min_x, 380.0)
    self.assertEqual(model.get('Debit').max_x, 460.0)
    self.assertEqual(model.get('Balance').min_x, 520.0)
    self.assertPartitions(model)

  def test_header_cells_sorted_by_x(self):
    fragments = list(reversed(header_row()))
    model = build_column_model(fragments)
    self.assertEqual(model.columns[0].name, 'Date and Time')
    self.assertPartitions(model)

  def test_only_cells_near_anchor_are_used(self):
    fragments = header_row(700.0) + [Fragment('Credit card payment', 200, 698.5),
                                     Fragment('Debit adjustment', 150, 690)]
    model = build_column_model(fragments)
    names = [c.name for c in model]
    self.assertIn('Credit card payment', names)
    self.assertNotIn('Debit adjustment', names)
    self.assertPartitions(model)

  def test_names_are_trimmed(self):
    model = build_column_model([Fragment('  Debit ', 430, 700), Fragment('Balance', 550, 700)])
    self.assertEqual([c.name for c in model], ['Debit', 'Balance'])

  def test_fused_header_cells_still_partition(self):
    fragments = [
      Fragment('Date and Time', 30, 700),
      Fragment('Description', 150, 700),
      Fragment('Reference No', 330, 700),
      Fragment('Debit', 430, 700),
      Fragment('Credit Balance', 500, 700),
    ]
    model = build_column_model(fragments)
    self.assertEqual(len(model), 5)
    self.assertIsNone(model.get('Credit'))
    self.assertPartitions(model)

  def test_fallback_when_no_header(self):
    model = build_column_model([Fragment('Hello', 10, 700)])
    self.assertTrue(model.used_fallback)
    self.assertEqual([(c.name, c.center_x, c.width) for c in model],
                     [(n, float(x), float(w)) for n, x, w in FALLBACK_COLUMNS])
    self.assertEqual(model.get('Debit').min_x, 450.0)
    self.assertEqual(model.get('Debit').max_x, 540.0)
    self.assertPartitions(model)

  def test_single_column_spans_axis(self):
    columns = compute_column_boundaries([Column('Balance', 550)])
    self.assertEqual(columns[0].min_x, 0.0)
    self.assertTrue(math.isinf(columns[0].max_x))

  def test_locate_is_half_open(self):
    model = ColumnModel([Column('Debit', 430), Column('Credit', 490), Column('Balance', 550)])
    self.assertEqual(model.locate(460.0).name, 'Credit')
    self.assertEqual(model.locate(459.99).name, 'Debit')
    self.assertEqual(model.locate(10_000).name, 'Balance')
    self.assertIsNone(model.locate(470, ['Debit']))

  def test_to_dicts_is_json_friendly(self):
    dicts = build_column_model(header_row()).to_dicts()
    self.assertEqual(dicts[0]['minX'], 0.0)
    self.assertIsNone(dicts[-1]['maxX'])


if __name__ == '__main__':
  unittest.main()
