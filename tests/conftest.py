import textwrap

import pytest

from selectorkit.backends.lxml_backend import LxmlBackend
from selectorkit.selectors.builtin import build_registry
from selectorkit.utils.config import get_settings


FORM_HTML = textwrap.dedent(
    """
    <html>
      <body>
        <form id="form" action="/form" method="post">
          <p>
            <label for="form_first_name">First Name</label>
            <input type="text" id="form_first_name" name="form[first_name]" value="John" class="text first">
          </p>
          <p>
            <label>Dog <input type="text" name="form[pets][dog]" value="dog" class="pet"></label>
          </p>
          <p>
            <label for="form_description">Description</label>
            <textarea id="form_description" name="form[description]">Descriptive text goes here</textarea>
          </p>
          <p>
            <label for="form_name_explanation">Explanation of Name</label>
            <textarea id="form_name_explanation" name="form[name_explanation]"></textarea>
          </p>
          <p>
            <label for="form_region">Region</label>
            <select id="form_region" name="form[region]">
              <option value="no">Norway</option>
              <option value="se" selected>Sweden</option>
            </select>
          </p>
          <p>
            <input type="checkbox" id="form_pets_cat" name="form[pets][]" value="cat" checked>
            <label for="form_pets_cat">Cat</label>
            <input type="checkbox" id="form_pets_hamster" name="form[pets][]" value="hamster">
            <label for="form_pets_hamster">Hamster</label>
          </p>
          <p>
            <label for="form_disabled_checkbox">Disabled Checkbox</label>
            <input type="checkbox" id="form_disabled_checkbox" name="form[disabled_checkbox]" disabled>
          </p>
          <fieldset disabled>
            <legend>
              <label>Disabled Fieldset Legend Checkbox <input type="checkbox" name="form[legend_checkbox]"></label>
            </legend>
            <legend>
              <label>Disabled Fieldset Legend2 Checkbox <input type="checkbox" name="form[legend2_checkbox]"></label>
            </legend>
            <label>Disabled Fieldset Checkbox <input type="checkbox" name="form[disabled_fieldset_checkbox]"></label>
          </fieldset>
          <p>
            <input type="text" name="form[phone]" placeholder="Phone number" aria-label="Telephone">
            <input type="hidden" name="form[token]" value="secret">
          </p>
          <p>
            <input type="submit" value="Save">
            <button id="go">Go now</button>
            <button disabled>Frozen</button>
          </p>
        </form>
        <a href="/foo" id="foo" title="awesome title">A link</a>
        <a href="/bar"><img alt="bar image"></a>
        <a>No href</a>
        <table id="scores"><caption>High Scores</caption><tr><td>1</td></tr></table>
      </body>
    </html>
    """
)


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def registry():
    return build_registry()


@pytest.fixture
def backend():
    return LxmlBackend.from_string(FORM_HTML)


@pytest.fixture
def form_file(tmp_path):
    p = tmp_path / "form.html"
    p.write_text(FORM_HTML, encoding="utf-8")
    return p
