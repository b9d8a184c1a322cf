import pytest

from dbdump.errors import MetadataFormatError
from dbdump.metadata import merge_metadata, parse_metadata, parse_metadata_text, save_metadata, write_metadata


SAMPLE = (
    "# Started dump at: 2024-01-01 00:00:00\n"
    "[config]\n"
    "quote-character = BACKTICK\n"
    "\n"
    "[myloader_session_variables]\n"
    "SQL_MODE='NO_AUTO_VALUE_ON_ZERO' /* 80032 */\n"
    "\n"
    "[`app`.`node`]\n"
    "real_table_name=node\n"
    "rows = 12\n"
    "\n"
    "# Finished dump at: 2024-01-01 00:00:01\n"
)


def test_parse_groups_in_order(tmp_path):
    path = tmp_path / 'metadata'
    path.write_text(SAMPLE)
    meta = parse_metadata(str(path))
    assert list(meta) == ['[config]', '[myloader_session_variables]', '[`app`.`node`]']
    assert meta['[`app`.`node`]'] == ['real_table_name=node', 'rows = 12']


def test_parse_crlf(tmp_path):
    path = tmp_path / 'metadata'
    path.write_bytes(SAMPLE.replace('\n', '\r\n').encode())
    meta = parse_metadata(str(path))
    assert meta['[config]'] == ['quote-character = BACKTICK']


def test_reopened_group_appends():
    meta = parse_metadata_text("[a]\n1\n[b]\n2\n[a]\n3\n")
    assert meta == {'[a]': ['1', '3'], '[b]': ['2']}
    assert list(meta) == ['[a]', '[b]']


def test_comment_before_first_group_is_ignored():
    assert parse_metadata_text("# header\n\n[a]\nx\n") == {'[a]': ['x']}


def test_line_outside_group():
    with pytest.raises(MetadataFormatError, match='line outside any group'):
        parse_metadata_text("# header\nrows = 1\n[a]\n")


def test_empty_group_kept():
    assert parse_metadata_text("[a]\n[b]\nx\n") == {'[a]': [], '[b]': ['x']}


def test_write_layout():
    text = write_metadata({'[a]': ['1', '2'], '[b]': []})
    assert text == "[a]\n1\n2\n\n[b]\n"


def test_write_then_parse():
    meta = {
        '[config]': ['quote-character = BACKTICK'],
        '[`app`.`node`]': ['real_table_name=node', 'rows = 12'],
        '[empty]': [],
    }
    assert parse_metadata_text(write_metadata(meta)) == meta


def test_merge_keeps_session_groups_from_primary():
    primary = {'[config]': ['a'], '[foo]': ['x']}
    other = {'[config]': ['z'], '[foo]': ['y']}
    assert merge_metadata(primary, other) == {'[config]': ['a'], '[foo]': ['x', 'y']}


def test_merge_strips_session_groups_even_when_missing_in_primary():
    primary = {'[foo]': ['x']}
    other = {'[config]': ['z'], '[myloader_session_variables]': ['v'], '[bar]': ['y']}
    assert merge_metadata(primary, other) == {'[foo]': ['x'], '[bar]': ['y']}


def test_merge_several_others_in_order():
    merged = merge_metadata({'[t]': ['1']}, {'[t]': ['2'], '[u]': ['a']}, {'[t]': ['3']})
    assert merged == {'[t]': ['1', '2', '3'], '[u]': ['a']}
    assert list(merged) == ['[t]', '[u]']


def test_merge_does_not_mutate_inputs():
    primary = {'[t]': ['1']}
    other = {'[t]': ['2'], '[config]': ['c']}
    merge_metadata(primary, other)
    assert primary == {'[t]': ['1']}
    assert other == {'[t]': ['2'], '[config]': ['c']}


def test_only_newlines_split_lines(tmp_path):
    meta = {
        '[config]': ['quote-character = BACKTICK'],
        '[`app`.`ta\x85ble`]': ['rows = 1'],
        '[`app`.`odd \x0c`]': ['rows = 2'],
    }
    path = tmp_path / 'metadata'
    save_metadata(str(path), meta)
    assert parse_metadata(str(path)) == meta


def test_non_utf8_bytes_survive(tmp_path):
    path = tmp_path / 'metadata'
    raw = b'[config]\nx\n\n[`app`.`caf\xe9`]\nrows = 1\n'
    path.write_bytes(raw)
    meta = parse_metadata(str(path))
    assert list(meta) == ['[config]', '[`app`.`caf\udce9`]']
    save_metadata(str(path), meta)
    assert path.read_bytes() == raw
