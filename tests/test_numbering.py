from sqlalchemy import text

from dispatch_desk.models import ConfigEntry, DISPATCH_START_NUMBER_KEY
from dispatch_desk.services import numbering


def test_first_number_uses_start():
    assert numbering.next_dispatch_number(1, None) == 1
    assert numbering.next_dispatch_number(5000, None) == 5000


def test_running_value_beats_lower_start():
    assert numbering.next_dispatch_number(1, 5000) == 5001


def test_raised_start_beats_running_value():
    assert numbering.next_dispatch_number(100, 10) == 100


def test_format_pads_to_seven_digits_without_truncating():
    assert numbering.format_dispatch_number(1) == "0000001"
    assert numbering.format_dispatch_number(5000) == "0005000"
    assert numbering.format_dispatch_number(10000000) == "10000000"


def test_parse_takes_leading_digits():
    assert numbering.parse_dispatch_number("0000042") == 42
    assert numbering.parse_dispatch_number("123-B") == 123
    assert numbering.parse_dispatch_number("MANUAL") == 0
    assert numbering.parse_dispatch_number("") == 0


def test_start_number_defaults_when_missing(db_session):
    assert numbering.get_start_number(db_session) == 1


def test_start_number_defaults_when_invalid(db_session):
    db_session.add(ConfigEntry(key=DISPATCH_START_NUMBER_KEY, value="zero"))
    db_session.commit()

    assert numbering.get_start_number(db_session) == 1


def test_start_number_defaults_when_config_unreadable(db_session):
    db_session.execute(text("DROP TABLE config"))
    db_session.commit()

    assert numbering.get_start_number(db_session, for_update=True) == 1
    assert numbering.last_issued_number(db_session) is None


def test_allocate_reads_config_and_ledger(db_session):
    db_session.add(ConfigEntry(key=DISPATCH_START_NUMBER_KEY, value="250"))
    db_session.commit()

    assert numbering.allocate_dispatch_number(db_session) == "0000250"
