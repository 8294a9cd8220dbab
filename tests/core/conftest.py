"""
Pytest configuration and fixtures for the documentation extraction tests.
"""

import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from doc_flow.core.declarations import index_declarations
from doc_flow.core.treesitter.parser import parse_javascript


SAMPLE_LIBRARY = '''/**
 * @fileOverview Tiny collection helpers.
 * @name Collections
 */

/**
 * Wraps an array in a collection.
 *
 * @constructor
 * @param {Array.<*>} source The wrapped array.
 */
function Collection(source) {
  this.source = source;
}

/**
 * Creates a shallow copy of an array.
 *
 * @public
 * @param {Array} array The array to copy.
 * @returns {Array} The copy.
 *
 * @examples
 * Collection.clone([]) // => []
 * Collection.clone([1, 2, 3]) // => [1, 2, 3]
 */
Collection.clone = function(array) {
  return array.slice(0);
};

/**
 * Gets the first element.
 *
 * @public
 * @returns {*}
 *
 * @examples
 * var c = new Collection([5, 6]);
 * c.first() // => 5
 */
Collection.prototype.first = function() {
  return this.source[0];
};

/**
 * Counts the elements.
 *
 * @benchmarks
 * new Collection([1, 2]).count() // native
 * slowCount([1, 2]) // loop - Ops per second
 */
Collection.prototype.count = function() {
  return this.source.length;
};

/**
 * @typedef {Object} Options
 * @property {boolean} deep Copy nested arrays too.
 * @property {number=} limit
 */

/**
 * Loops slowly.
 *
 * @private
 * @param {Array} array
 */
function slowCount(array) {
  var n = 0;
  for (var i = 0; i < array.length; ++i) { n++; }
  return n;
}

module.exports = Collection;
'''


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing."""
    temp_path = Path(tempfile.mkdtemp())

    yield temp_path

    # Cleanup after test
    shutil.rmtree(temp_path)


@pytest.fixture
def sample_library() -> str:
    """A small documented JavaScript library."""
    return SAMPLE_LIBRARY


@pytest.fixture
def sample_library_file(temp_dir: Path) -> Path:
    js_file = temp_dir / "collections.js"
    with open(js_file, 'w') as f:
        f.write(SAMPLE_LIBRARY)
    return js_file


@pytest.fixture
def parse_js():
    """Parses a snippet and returns (parsed source, declaration index)."""
    def _parse(source: str):
        parsed = parse_javascript(source)
        return parsed, index_declarations(parsed.root)
    return _parse
