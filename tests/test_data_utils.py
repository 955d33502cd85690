"""
Unit tests for the data model and spreadsheet export.
"""
import io
import zipfile

import pytest
import pandas as pd

from places_export.exceptions import InvalidInput
from places_export.models import Place, SearchRequest
from places_export.data_utils import (
    EXPORT_COLUMNS,
    export_to_csv,
    export_to_excel,
    get_summary_stats,
    places_to_dataframe,
)


class TestSearchRequest:
    """Tests for input validation."""

    def test_from_payload(self):
        request = SearchRequest.from_payload({'serviceType': ' dentist ', 'location': 'Denver, CO'})

        assert request.service_type == 'dentist'
        assert request.location == 'Denver, CO'

    @pytest.mark.parametrize('payload', [
        {'serviceType': '', 'location': 'Denver'},
        {'serviceType': 'dentist', 'location': '   '},
        {'serviceType': 'dentist'},
        {'location': 'Denver'},
        {'serviceType': 5, 'location': 'Denver'},
        None,
        ['dentist', 'Denver'],
    ])
    def test_invalid_payloads(self, payload):
        with pytest.raises(InvalidInput):
            SearchRequest.from_payload(payload)


class TestPlace:
    """Tests for merging search records with details."""

    @pytest.fixture
    def result(self):
        return {
            'place_id': 'abc',
            'name': 'Bright Smile Dental',
            'vicinity': '100 Main St',
            'rating': 4.6,
            'user_ratings_total': 212,
            'types': ['dentist', 'health', 'point_of_interest', 'establishment'],
        }

    def test_merge_details(self, result):
        place = Place.from_result(result, {
            'website': 'https://brightsmile.org',
            'formatted_phone_number': '(303) 555-0100',
            'formatted_address': '100 Main St, Denver, CO 80202, USA',
        })

        assert place.website == 'https://brightsmile.org'
        assert place.phone == '(303) 555-0100'
        assert place.address == '100 Main St, Denver, CO 80202, USA'
        assert place.has_website

    def test_missing_details_fall_back(self, result):
        place = Place.from_result(result, None)

        assert place.website == ''
        assert place.phone == ''
        assert place.address == '100 Main St'
        assert not place.has_website

    def test_business_type_filters_generic_tags(self):
        place = Place(
            place_id='x',
            name='Corner Store',
            types=('convenience_store', 'point_of_interest', 'food', 'establishment'),
        )

        assert place.business_type == 'convenience store, food'


class TestDataUtils:
    """Tests for data utilities."""

    @pytest.fixture
    def sample_places(self):
        """Create sample places."""
        return [
            Place(
                place_id='1',
                name='Business A',
                vicinity='123 Main St',
                rating=4.5,
                user_ratings_total=120,
                types=('car_repair', 'point_of_interest', 'establishment'),
                website='https://businessa.org',
                phone='555-0001',
                formatted_address='123 Main St, Denver, CO',
            ),
            Place(
                place_id='2',
                name='Business B',
                vicinity='456 Oak Ave',
                types=('point_of_interest', 'establishment'),
            ),
        ]

    def test_places_to_dataframe(self, sample_places):
        df = places_to_dataframe(sample_places)

        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == [
            'Name', 'Address', 'Rating', 'Rating Count',
            'Has Website', 'Website', 'Phone', 'Business Type',
        ]
        assert df['Name'].tolist() == ['Business A', 'Business B']

    def test_row_values(self, sample_places):
        df = places_to_dataframe(sample_places)
        first, second = df.iloc[0], df.iloc[1]

        assert first['Address'] == '123 Main St, Denver, CO'
        assert first['Rating'] == 4.5
        assert first['Rating Count'] == 120
        assert first['Has Website'] == 'Yes'
        assert first['Business Type'] == 'car repair'

        assert second['Address'] == '456 Oak Ave'
        assert second['Rating'] == 'N/A'
        assert second['Rating Count'] == 0
        assert second['Has Website'] == 'No'
        assert second['Website'] == 'N/A'
        assert second['Phone'] == 'N/A'
        assert second['Business Type'] == 'N/A'

    def test_business_type_never_has_generic_tags(self, sample_places):
        df = places_to_dataframe(sample_places)

        for value in df['Business Type']:
            assert 'point_of_interest' not in value
            assert 'establishment' not in value
            assert '_' not in value

    def test_export_to_excel_bytes(self, sample_places):
        df = places_to_dataframe(sample_places)

        content = export_to_excel(df, return_bytes=True)

        assert isinstance(content, bytes)
        with zipfile.ZipFile(io.BytesIO(content)) as archive:
            sheet = archive.read('xl/worksheets/sheet1.xml').decode('utf-8')
            styles = archive.read('xl/styles.xml').decode('utf-8')

        assert '<autoFilter ref="A1:H1"/>' in sheet
        assert 'state="frozen"' in sheet
        assert 'ySplit="1"' in sheet
        assert 'formatCode="0.0"' in styles
        assert 'E0E0E0' in styles

    def test_export_to_excel_file(self, sample_places, tmp_path):
        df = places_to_dataframe(sample_places)
        output = tmp_path / 'places.xlsx'

        assert export_to_excel(df, output) is None
        assert zipfile.is_zipfile(output)

    def test_export_to_csv(self, sample_places):
        df = places_to_dataframe(sample_places)

        content = export_to_csv(df, return_bytes=True).decode('utf-8')

        assert content.splitlines()[0] == ','.join(EXPORT_COLUMNS)
        assert 'Business B' in content

    def test_get_summary_stats(self, sample_places):
        stats = get_summary_stats(places_to_dataframe(sample_places))

        assert stats['total_places'] == 2
        assert stats['with_phone'] == 1
        assert stats['with_website'] == 1
        assert stats['avg_rating'] == 4.5

    def test_empty_dataframe(self):
        df = places_to_dataframe([])

        assert isinstance(df, pd.DataFrame)
        assert len(df) == 0

        stats = get_summary_stats(df)
        assert stats['total_places'] == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
