"""Shared fixtures."""

import logging

import pytest

from schemabuilder.config.settings import reset_settings
from schemabuilder.ir.logical import Column, Relationship, Schema, Table


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate every test from SCHEMABUILDER_* variables and the cached settings."""
    for name in (
        "SCHEMABUILDER_DEFAULT_DIALECT",
        "SCHEMABUILDER_FK_NAMING",
        "SCHEMABUILDER_DEFAULT_CARDINALITY",
        "SCHEMABUILDER_DEFAULT_ON_DELETE",
        "SCHEMABUILDER_DEFAULT_ON_UPDATE",
        "SCHEMABUILDER_LOG_LEVEL",
        "SCHEMABUILDER_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    yield
    reset_settings()
    # CLI runs bind handlers to streams that are closed afterwards
    logger = logging.getLogger("schemabuilder")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.propagate = True


def make_table(table_id, name, *columns, x=0, y=0):
    return Table(id=table_id, name=name, columns=list(columns), x=x, y=y)


def pk(column_id, name="id", type="INTEGER"):
    return Column(id=column_id, name=name, type=type, primary_key=True)


@pytest.fixture
def customer():
    return make_table(
        "t-customer",
        "Customer",
        pk("c-customer-id"),
        Column(id="c-customer-name", name="name", type="TEXT"),
    )


@pytest.fixture
def invoice():
    return make_table(
        "t-invoice",
        "Invoice",
        pk("c-invoice-id"),
        Column(id="c-invoice-total", name="total", type="CURRENCY"),
        x=200,
        y=100,
    )


@pytest.fixture
def customer_invoice(customer, invoice):
    """Customer 1:N Invoice, both keyed by an INTEGER column named id."""
    return Schema(
        tables=[customer, invoice],
        relationships=[
            Relationship(
                id="r1",
                source_table_id="t-customer",
                source_column_id="c-customer-id",
                target_table_id="t-invoice",
                target_column_id="c-invoice-id",
                cardinality="1:N",
            )
        ],
    )


@pytest.fixture
def customer_order():
    """Customer 1:N Order where the key names differ, so the FK column is new."""
    return Schema(
        tables=[
            make_table("t-customer", "Customer", pk("c-customer-id", "customer_id")),
            make_table(
                "t-order",
                "Order",
                pk("c-order-id", "order_id"),
                Column(id="c-order-date", name="ordered_at", type="DATETIME"),
            ),
        ],
        relationships=[
            Relationship(
                id="r1",
                source_table_id="t-customer",
                source_column_id="c-customer-id",
                target_table_id="t-order",
                target_column_id="c-order-id",
                cardinality="1:N",
            )
        ],
    )


@pytest.fixture
def student_course():
    """Student N:M Course, both keyed by an INTEGER column named id."""
    return Schema(
        tables=[
            make_table("t-student", "Student", pk("c-student-id"), x=0, y=0),
            make_table("t-course", "Course", pk("c-course-id"), x=400, y=200),
        ],
        relationships=[
            Relationship(
                id="r-enrol",
                source_table_id="t-student",
                source_column_id="c-student-id",
                target_table_id="t-course",
                target_column_id="c-course-id",
                cardinality="N:M",
            )
        ],
    )
