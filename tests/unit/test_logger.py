import logging

from offline_ocr.logging.logger import Log, _FieldsFormatter


def _make_record(**fields: object) -> logging.LogRecord:
    record = logging.makeLogRecord({"msg": "Cached language", "levelname": "INFO"})
    record.__dict__.update(fields)
    return record


class TestFieldsFormatter:
    def test_appends_structured_fields(self) -> None:
        formatter = _FieldsFormatter("[%(levelname)s] %(message)s")

        line = formatter.format(_make_record(lang="eng", size=1024))

        assert line == "[INFO] Cached language | lang=eng size=1024"

    def test_plain_message_without_fields(self) -> None:
        formatter = _FieldsFormatter("[%(levelname)s] %(message)s")

        assert formatter.format(_make_record()) == "[INFO] Cached language"


class TestLog:
    def test_fields_reach_the_record(self, caplog) -> None:  # type: ignore[no-untyped-def]
        with caplog.at_level(logging.INFO, logger="offline_ocr"):
            Log.info("Job admitted", job_id="abc", langs="eng+deu")

        record = caplog.records[-1]
        assert record.getMessage() == "Job admitted"
        assert record.job_id == "abc"  # type: ignore[attr-defined]
        assert record.langs == "eng+deu"  # type: ignore[attr-defined]
