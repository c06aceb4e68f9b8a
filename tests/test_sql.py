"""
Tests for core/sql.py - partial update and WHERE clause builders.
"""
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from jobly.core.exceptions import BadRequestException
from jobly.core.sql import (
    WhereClause,
    bind_params,
    is_active_filter,
    is_foreign_key_violation,
    sql_for_partial_update,
)


class TestSqlForPartialUpdate:
    """Test the SET clause builder."""

    def test_single_field(self):
        set_cols, values = sql_for_partial_update({"name": "New"}, {})

        assert set_cols == '"name"=:p1'
        assert values == ["New"]

    def test_maps_field_names_to_columns(self):
        set_cols, values = sql_for_partial_update(
            {"firstName": "Aliya", "age": 32},
            {"firstName": "first_name"},
        )

        assert set_cols == '"first_name"=:p1, "age"=:p2'
        assert values == ["Aliya", 32]

    def test_placeholders_follow_input_order(self):
        data = {"logoUrl": None, "name": "N", "numEmployees": 5, "description": "D"}
        set_cols, values = sql_for_partial_update(
            data,
            {"numEmployees": "num_employees", "logoUrl": "logo_url"},
        )

        fragments = set_cols.split(", ")
        assert len(fragments) == len(values) == 4
        assert fragments == [
            '"logo_url"=:p1',
            '"name"=:p2',
            '"num_employees"=:p3',
            '"description"=:p4',
        ]
        assert values == [None, "N", 5, "D"]

    def test_values_never_in_clause(self):
        set_cols, _ = sql_for_partial_update({"name": "x'; DROP TABLE jobs; --"})

        assert "DROP" not in set_cols

    def test_no_mapping_defaults_to_field_name(self):
        set_cols, _ = sql_for_partial_update({"title": "T"})

        assert set_cols == '"title"=:p1'

    def test_empty_data_fails(self):
        with pytest.raises(BadRequestException) as exc_info:
            sql_for_partial_update({}, {"numEmployees": "num_employees"})

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "No data"


class TestBindParams:
    def test_numbers_from_one(self):
        assert bind_params(["a", 2]) == {"p1": "a", "p2": 2}

    def test_custom_start(self):
        assert bind_params(["k"], start=4) == {"p4": "k"}

    def test_empty(self):
        assert bind_params([]) == {}


class TestIsActiveFilter:
    @pytest.mark.parametrize("value", [None, "", 0, 0.0, Decimal("0")])
    def test_absent_values(self, value):
        assert is_active_filter(value) is False

    @pytest.mark.parametrize("value", ["a", " ", 1, -3, 2.5, Decimal("0.1")])
    def test_active_values(self, value):
        assert is_active_filter(value) is True


class TestWhereClause:
    def test_empty(self):
        assert WhereClause().build() == ("", [])

    def test_first_condition_uses_where_then_and(self):
        where = WhereClause()
        where.add_param("a >= {}", 1)
        where.add("b > 0")
        where.add_param("c <= {}", 3)

        clause, args = where.build()

        assert clause == "WHERE a >= :p1 AND b > 0 AND c <= :p2"
        assert args == [1, 3]

    def test_condition_without_param_first(self):
        clause, args = WhereClause().add("equity > 0").build()

        assert clause == "WHERE equity > 0"
        assert args == []


class TestIsForeignKeyViolation:
    @pytest.mark.parametrize(
        "message",
        [
            "FOREIGN KEY constraint failed",
            'insert or update on table "jobs" violates foreign key constraint "jobs_company_handle_fkey"',
        ],
    )
    def test_foreign_key(self, message):
        exc = IntegrityError("INSERT", {}, Exception(message))

        assert is_foreign_key_violation(exc) is True

    @pytest.mark.parametrize(
        "message",
        [
            "CHECK constraint failed: ck_jobs_equity",
            'null value in column "title" violates not-null constraint',
        ],
    )
    def test_other_constraints(self, message):
        exc = IntegrityError("INSERT", {}, Exception(message))

        assert is_foreign_key_violation(exc) is False
