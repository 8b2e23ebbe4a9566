from __future__ import annotations

import pytest

from qrgen.forms import ContactForm, EmailForm, SMSForm, TemplateWizard, WiFiForm, make_form
from qrgen.templates import ContentType


def type_text(wizard: TemplateWizard, text: str) -> None:
    for char in text:
        wizard.update(char)


def test_make_form_dispatches_by_content_type():
    assert isinstance(make_form(ContentType.WIFI), WiFiForm)
    assert isinstance(make_form(ContentType.CONTACT), ContactForm)
    assert isinstance(make_form(ContentType.EMAIL), EmailForm)
    assert isinstance(make_form(ContentType.SMS), SMSForm)
    with pytest.raises(ValueError):
        make_form(ContentType.URL)


@pytest.mark.parametrize(
    "content_type, count",
    [
        (ContentType.WIFI, 4),
        (ContentType.CONTACT, 7),
        (ContentType.EMAIL, 3),
        (ContentType.SMS, 2),
    ],
)
def test_field_counts(content_type, count):
    form = make_form(content_type)

    assert form.field_count() == count
    assert len(form.labels()) == count


def test_focus_moves_and_clamps():
    wizard = TemplateWizard(ContentType.SMS)
    assert wizard.form.inputs[0].focused

    wizard.update("shift+tab")
    assert wizard.focus_index == 0

    wizard.update("tab")
    wizard.update("down")
    assert wizard.focus_index == 1
    assert wizard.form.inputs[1].focused
    assert not wizard.form.inputs[0].focused

    wizard.update("up")
    assert wizard.focus_index == 0


def test_sms_confirms_encoded_payload():
    wizard = TemplateWizard(ContentType.SMS)
    type_text(wizard, " +123 ")
    wizard.update("tab")
    type_text(wizard, "hi")

    outcome = wizard.update("enter")

    assert outcome.is_confirmed
    assert outcome.value == "smsto:+123:hi"
    assert wizard.result == "smsto:+123:hi"


@pytest.mark.parametrize(
    "content_type, message",
    [
        (ContentType.WIFI, "network name (SSID) is required"),
        (ContentType.CONTACT, "a first or last name is required"),
        (ContentType.EMAIL, "an email address is required"),
        (ContentType.SMS, "a phone number is required"),
    ],
)
def test_empty_required_field_refuses_confirmation(content_type, message):
    wizard = TemplateWizard(content_type)

    outcome = wizard.update("enter")

    assert outcome.is_active
    assert outcome.error == message


def test_escape_cancels_form():
    assert TemplateWizard(ContentType.EMAIL).update("esc").is_cancelled


def test_wifi_toggle_fields():
    wizard = TemplateWizard(ContentType.WIFI)
    form = wizard.form
    type_text(wizard, "Home")
    wizard.update("tab")
    type_text(wizard, " pass ")
    wizard.update("tab")

    wizard.update("left")
    assert form.encryption_index == 0
    wizard.update("right")
    wizard.update("right")
    wizard.update("right")
    assert form.encryption_index == 2
    wizard.update(" ")
    assert form.encryption_index == 0
    wizard.update("x")
    assert form.encryption_index == 0

    wizard.update("tab")
    wizard.update("left")
    assert form.hidden is True
    wizard.update(" ")
    assert form.hidden is False
    wizard.update("right")

    outcome = wizard.update("enter")
    assert outcome.value == "WIFI:T:WPA;S:Home;P: pass ;H:true;;"


def test_wifi_open_network():
    wizard = TemplateWizard(ContentType.WIFI)
    type_text(wizard, "Cafe")
    wizard.update("tab")
    wizard.update("tab")
    wizard.update("right")
    wizard.update("right")

    assert wizard.update("enter").value == "WIFI:T:nopass;S:Cafe;;"


def test_contact_accepts_last_name_only():
    wizard = TemplateWizard(ContentType.CONTACT)
    wizard.update("tab")
    type_text(wizard, "Doe")

    outcome = wizard.update("enter")

    assert outcome.is_confirmed
    assert "N:Doe;;;;\r\n" in outcome.value
    assert "FN:Doe\r\n" in outcome.value


def test_email_form_encodes_mailto():
    wizard = TemplateWizard(ContentType.EMAIL)
    type_text(wizard, "me@example.com")
    wizard.update("tab")
    type_text(wizard, "Hello you")

    assert wizard.update("enter").value == "mailto:me@example.com?subject=Hello%20you"
