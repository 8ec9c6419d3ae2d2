# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# This file contains shared fixtures for all tests.
#
# FIXTURES:
# ---------
#   breed_records     → 4 records, one categorical "breed" column
#   catalog_records   → 6 product records covering every field category
#   native_markup     → plain HTML: select, search, sortable table, form
#   mui_markup        → Material UI style markup (classes + ARIA)
#   heuristic_markup  → custom div grid + text-labelled input
#   app_config        → default AppConfig, independent of the environment
#
# ==============================================

import pytest

from patternbridge.config import AppConfig, reset_config


@pytest.fixture
def breed_records():
    """The four-record breed dataset."""
    return [
        {"breed": "Labrador"},
        {"breed": "Labrador"},
        {"breed": "Poodle"},
        {"breed": "Boxer"},
    ]


@pytest.fixture
def catalog_records():
    """Product catalog export as it comes out of a TSV file (all strings)."""
    return [
        {"product_id": "P001", "name": "Trail Shoe", "category": "footwear",
         "sub_category": "running", "price": "89.99", "status": "active", "created_at": "2024-01-05"},
        {"product_id": "P002", "name": "Rain Jacket", "category": "outerwear",
         "sub_category": "shell", "price": "120", "status": "active", "created_at": "2024-01-12"},
        {"product_id": "P003", "name": "Wool Sock", "category": "footwear",
         "sub_category": "hiking", "price": "12.5", "status": "archived", "created_at": "2024-02-01"},
        {"product_id": "P004", "name": "Fleece", "category": "outerwear",
         "sub_category": "midlayer", "price": "64", "status": "active", "created_at": "2024-02-14"},
        {"product_id": "P005", "name": "Cap", "category": "accessories",
         "sub_category": "", "price": "19", "status": "draft", "created_at": "2024-03-03"},
        {"product_id": "P006", "name": "Day Pack", "category": "accessories",
         "sub_category": "bags", "price": "75", "status": "active", "created_at": "2024-03-20"},
    ]


@pytest.fixture
def native_markup():
    """Server-rendered listing page built from standard controls."""
    return """
<html><body>
<form id="filters" aria-label="Filters">
  <label for="breed-filter">Breed</label>
  <select id="breed-filter" name="breed">
    <option value="">All</option>
    <option>Labrador</option>
    <option>Poodle</option>
    <option>Boxer</option>
  </select>
  <input type="search" id="name-search" placeholder="Search by name">
  <button type="submit">Apply</button>
</form>
<p>Showing 3 of 120 results</p>
<table id="results">
  <thead>
    <tr><th class="sortable">Name</th><th class="sortable">Breed</th><th>Age</th></tr>
  </thead>
  <tbody>
    <tr><td>Rex</td><td>Boxer</td><td>3</td></tr>
    <tr><td>Bella</td><td>Poodle</td><td>5</td></tr>
    <tr><td>Max</td><td>Labrador</td><td>2</td></tr>
  </tbody>
</table>
<nav class="pagination" aria-label="Pagination"><a href="?page=2">Next</a></nav>
</body></html>
"""


@pytest.fixture
def mui_markup():
    """Client-rendered Material UI page with generated class names."""
    return """
<div class="MuiFormControl-root">
  <div class="MuiAutocomplete-root" data-testid="breed-select">
    <label>Breed</label>
    <input class="MuiInputBase-input css-1x2y3z" type="text">
  </div>
  <div class="MuiTextField-root">
    <input type="text" aria-label="Search dogs" placeholder="Search...">
  </div>
  <div class="MuiDataGrid-root css-abc123" aria-label="Dogs">
    <div role="row">
      <div role="columnheader" aria-sort="ascending">Name</div>
      <div role="columnheader">Breed</div>
    </div>
    <div role="row"><div role="cell">Rex</div><div role="cell">Boxer</div></div>
    <div role="row"><div role="cell">Bo</div><div role="cell">Poodle</div></div>
  </div>
  <button class="MuiButton-root css-9q8w7e">Reset</button>
</div>
"""


@pytest.fixture
def heuristic_markup():
    """Custom markup only recognisable from text and column vocabulary."""
    return """
<div id="case-list">
  <div class="header"><div>Case ID</div><div>Patient ID</div><div>Status</div></div>
  <div class="row"><div>C-1</div><div>P-9</div><div>Open</div></div>
  <div class="row"><div>C-2</div><div>P-4</div><div>Closed</div></div>
</div>
<div class="searchbar"><span>Find a case</span><input type="text" id="q"></div>
"""


@pytest.fixture
def app_config():
    """Default configuration, not read from the environment."""
    return AppConfig()


@pytest.fixture(autouse=True)
def _fresh_config():
    """Every test starts without a cached config singleton."""
    reset_config()
    yield
    reset_config()
