# Path: spec_builder/tests/unit/test_product.py
"""
Unit tests for ProductSpecification.
"""

from spec_builder.process.resolution import ProductSpecification, SpecificationRow


class TestProductSpecification:
    """Tests for the product model."""

    def test_sorted_specs(self):
        """Display order follows row.order."""
        product = ProductSpecification(specs=[
            SpecificationRow(order=30, catalogue_id='c'),
            SpecificationRow(order=10, catalogue_id='a'),
            SpecificationRow(order=20, catalogue_id='b'),
        ])

        assert [r.catalogue_id for r in product.sorted_specs()] == ['a', 'b', 'c']

    def test_is_fully_resolved(self):
        """A product with an unresolved row is not fully resolved."""
        product = ProductSpecification(specs=[SpecificationRow(order=10, catalogue_id='a')])
        assert product.is_fully_resolved

        product.specs.append(SpecificationRow(order=20, is_unresolved=True))
        assert not product.is_fully_resolved

    def test_defaults(self):
        """New products get an id and today's date."""
        product = ProductSpecification()

        assert product.id
        assert len(product.effective_date) == 10

    def test_dict_round_trip(self):
        """Stored products load back unchanged."""
        product = ProductSpecification(
            name='X', code='X-1', effective_date='2024-01-31',
            specs=[SpecificationRow(order=10, catalogue_id='a', min='0')],
        )

        assert ProductSpecification.from_dict(product.to_dict()) == product


class TestSpecificationRowFromDict:
    """Tests for loading stored rows."""

    def test_numeric_limits_become_text(self):
        """Numbers in stored rows load as text and zero is kept."""
        row = SpecificationRow.from_dict({
            'order': 10, 'catalogueId': 'a',
            'min': 0, 'max': 5.5, 'overrideMin': 1.0, 'overrideMax': 0,
        })

        assert row.min == '0'
        assert row.max == '5.5'
        assert row.override_min == '1'
        assert row.override_max == '0'
        assert row.effective_min == '1'

    def test_missing_limits_are_blank(self):
        """Absent or null limits load as empty strings."""
        row = SpecificationRow.from_dict({'order': 10, 'min': None})

        assert row.min == ''
        assert row.max == ''
        assert row.text_spec == ''
        assert row.is_unresolved

    def test_effective_text_prefers_override(self):
        """The operator's text override wins over the extracted text."""
        row = SpecificationRow.from_dict({
            'order': 10, 'catalogueId': 'a',
            'textSpec': 'White powder', 'overrideText': 'Off-white powder',
        })

        assert row.effective_text == 'Off-white powder'
        assert SpecificationRow(order=10, catalogue_id='a', text_spec='Clear').effective_text == 'Clear'
