"""
Tests for TableParser: delimiter detection, header matching,
numeric conversion and silent degradation.
"""

import itertools
import math

import pytest
from ig_gallery.parser import TableParser, ColumnIndex, detect_delimiter, parse_table, to_number


LINK = "https://www.instagram.com/p/DMBhlKcJHK4/#advertiser"


@pytest.fixture
def parser():
    return TableParser()


class TestDetectDelimiter:

    def test_tab(self):
        assert detect_delimiter("Name\tResults") == "\t"

    def test_comma(self):
        assert detect_delimiter("Name,Results") == ","

    def test_no_delimiter_defaults_to_comma(self):
        assert detect_delimiter("Name") == ","


class TestToNumber:

    def test_integer(self):
        assert to_number("30") == 30

    def test_decimal(self):
        assert to_number("0.12") == 0.12

    def test_whitespace(self):
        assert to_number("  2 ") == 2

    def test_blank_is_zero(self):
        assert to_number("") == 0.0
        assert to_number("   ") == 0.0

    def test_missing_is_nan(self):
        assert math.isnan(to_number(None))

    def test_text_is_nan(self):
        assert math.isnan(to_number("abc"))
        assert math.isnan(to_number("1,234"))
        assert math.isnan(to_number("$0.20"))

    def test_exponent(self):
        assert to_number("1e3") == 1000

    def test_infinity(self):
        assert to_number("-Infinity") == -math.inf


class TestColumnIndex:

    def test_from_header(self):
        idx = ColumnIndex.from_header(["name", "results", "cpr", "video link"])
        assert (idx.name, idx.results, idx.cpr, idx.link) == (0, 1, 2, 3)
        assert idx.missing == []

    def test_link_substring_rule(self):
        idx = ColumnIndex.from_header(["ad video permalink"])
        assert idx.link == 0

    def test_link_needs_both_words(self):
        idx = ColumnIndex.from_header(["link", "video"])
        assert idx.link == -1

    def test_missing(self):
        idx = ColumnIndex.from_header(["name"])
        assert idx.missing == ["results", "cpr", "link"]


class TestParse:

    def test_reference_row(self, parser):
        rows = parser.parse(f"Name\tResults\tCPR\tVideo Link\nAmerican Psycho\t2\t0.2\t{LINK}")
        assert len(rows) == 1
        row = rows[0]
        assert row.name == "American Psycho"
        assert row.results == 2
        assert row.cpr == 0.2
        assert row.link == LINK

    def test_two_rows_in_order(self, parser, sample_tsv):
        rows = parser.parse(sample_tsv)
        assert [r.name for r in rows] == ["American Psycho", "Jake WOrk"]
        assert rows[1].results == 30
        assert rows[1].cpr == 0.12

    def test_comma_delimiter(self, parser):
        rows = parser.parse(f"name,results,cpr,video link\nA,5,1.5,{LINK}")
        assert rows[0].name == "A"
        assert rows[0].results == 5
        assert rows[0].link == LINK

    def test_tab_wins_over_body_commas(self, parser):
        rows = parser.parse("Name\tResults\tCPR\tVideo Link\nSmith, John\t1\t2\thttps://x/p/A/")
        assert rows[0].name == "Smith, John"
        assert rows[0].link == "https://x/p/A/"

    def test_header_case_and_whitespace(self, parser):
        rows = parser.parse(" NAME \t Results\tcPr\tVIDEO LINK \nA\t1\t2\thttps://x/p/A/")
        assert rows[0].name == "A"
        assert rows[0].cpr == 2

    @pytest.mark.parametrize("order", list(itertools.permutations(range(4))))
    def test_header_permutations(self, parser, order):
        headers = ["Name", "Results", "CPR", "Video Link"]
        values = ["American Psycho", "2", "0.2", LINK]
        header = "\t".join(headers[i] for i in order)
        line = "\t".join(values[i] for i in order)
        row = parser.parse(f"{header}\n{line}")[0]
        assert (row.name, row.results, row.cpr, row.link) == ("American Psycho", 2, 0.2, LINK)

    def test_extra_columns_ignored(self, parser):
        rows = parser.parse(f"Campaign\tName\tSpend\tResults\tCPR\tVideo Link\nQ3\tA\t100\t4\t25\t{LINK}")
        assert rows[0].name == "A"
        assert rows[0].results == 4
        assert rows[0].cpr == 25

    def test_empty_input(self, parser):
        assert parser.parse("") == []
        assert parser.parse("\n\n  \n") == []

    def test_header_only(self, parser):
        assert parser.parse("Name\tResults\tCPR\tVideo Link\n") == []

    def test_blank_lines_dropped(self, parser):
        text = f"Name\tResults\tCPR\tVideo Link\n\nA\t1\t1\t{LINK}\n\nB\t2\t2\t{LINK}\n\n"
        assert [r.name for r in parser.parse(text)] == ["A", "B"]

    def test_crlf(self, parser):
        rows = parser.parse(f"Name\tResults\tCPR\tVideo Link\r\nA\t1\t1\t{LINK}\r\n")
        assert rows[0].link == LINK

    def test_non_numeric_is_nan(self, parser):
        row = parser.parse(f"Name\tResults\tCPR\tVideo Link\nA\tn/a\t-\t{LINK}")[0]
        assert math.isnan(row.results)
        assert math.isnan(row.cpr)

    def test_missing_columns_degrade(self, parser):
        row = parser.parse("Title\tURL\nA\thttps://x/p/A/")[0]
        assert row.name is None
        assert row.link is None
        assert math.isnan(row.results)
        assert math.isnan(row.cpr)

    def test_short_line(self, parser):
        row = parser.parse("Name\tResults\tCPR\tVideo Link\nOnly name")[0]
        assert row.name == "Only name"
        assert math.isnan(row.results)
        assert row.link is None

    def test_rows_are_frozen(self, parser):
        row = parser.parse(f"Name\tResults\tCPR\tVideo Link\nA\t1\t1\t{LINK}")[0]
        with pytest.raises(Exception):
            row.name = "B"

    def test_parse_table_shortcut(self, sample_tsv):
        assert len(parse_table(sample_tsv)) == 2
