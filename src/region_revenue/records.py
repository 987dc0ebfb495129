"""
Typed records for the six input tables and their line parsers.

Each parser maps one ``|``-delimited line to one immutable record. Only
the consumed columns are read; anything after them is ignored, including
the trailing delimiter of dbgen output. A non-numeric key, price or
discount raises ValueError; a missing column raises IndexError. The
loader turns either into a ParseError with file and line context.
"""

from typing import NamedTuple

DELIMITER = "|"


class Customer(NamedTuple):
    custkey: int
    nationkey: int


class Order(NamedTuple):
    orderkey: int
    custkey: int
    orderdate: str


class LineItem(NamedTuple):
    orderkey: int
    suppkey: int
    extendedprice: float
    discount: float


class Supplier(NamedTuple):
    suppkey: int
    nationkey: int


class Nation(NamedTuple):
    nationkey: int
    regionkey: int
    name: str


class Region(NamedTuple):
    regionkey: int
    name: str


def split_fields(line: str) -> list[str]:
    """Split a line on the table delimiter, dropping the line terminator."""
    return line.rstrip("\r\n").split(DELIMITER)


def parse_customer(line: str) -> Customer:
    fields = split_fields(line)
    return Customer(custkey=int(fields[0]), nationkey=int(fields[3]))


def parse_order(line: str) -> Order:
    fields = split_fields(line)
    return Order(orderkey=int(fields[0]), custkey=int(fields[1]), orderdate=fields[4])


def parse_line_item(line: str) -> LineItem:
    fields = split_fields(line)
    return LineItem(
        orderkey=int(fields[0]),
        suppkey=int(fields[2]),
        extendedprice=float(fields[5]),
        discount=float(fields[6]),
    )


def parse_supplier(line: str) -> Supplier:
    fields = split_fields(line)
    return Supplier(suppkey=int(fields[0]), nationkey=int(fields[3]))


def parse_nation(line: str) -> Nation:
    fields = split_fields(line)
    return Nation(nationkey=int(fields[0]), regionkey=int(fields[2]), name=fields[1])


def parse_region(line: str) -> Region:
    fields = split_fields(line)
    return Region(regionkey=int(fields[0]), name=fields[1])
