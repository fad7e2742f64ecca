"""Tests for the CPF and phone input masks."""

from src.rules.contact_formatter import (
    apply_mask,
    format_cpf,
    format_phone,
    is_complete_phone,
)


class TestCpfMask:
    def test_full_number(self):
        assert format_cpf("52998224725") == "529.982.247-25"

    def test_already_formatted_is_unchanged(self):
        assert format_cpf("529.982.247-25") == "529.982.247-25"

    def test_partial_input(self):
        assert format_cpf("529") == "529"
        assert format_cpf("5299") == "529.9"
        assert format_cpf("5299822") == "529.982.2"
        assert format_cpf("5299822472") == "529.982.247-2"

    def test_extra_digits_dropped(self):
        assert format_cpf("529982247251234") == "529.982.247-25"

    def test_letters_stripped(self):
        assert format_cpf("abc529x982") == "529.982"

    def test_empty(self):
        assert format_cpf("") == ""

    def test_non_ascii_digits_stripped(self):
        assert format_cpf("1111111111１") == "111.111.111-1"
        assert format_cpf("٥٢٩") == ""


class TestPhoneMask:
    def test_mobile_number(self):
        assert format_phone("11912345678") == "(11) 91234-5678"

    def test_landline_number(self):
        assert format_phone("1123456789") == "(11) 2345-6789"

    def test_already_formatted_is_unchanged(self):
        assert format_phone("(11) 91234-5678") == "(11) 91234-5678"
        assert format_phone("(11) 2345-6789") == "(11) 2345-6789"

    def test_partial_input(self):
        assert format_phone("11") == "11"
        assert format_phone("119") == "(11) 9"
        assert format_phone("1191234") == "(11) 9-1234"

    def test_partial_output_is_stable(self):
        partial = format_phone("1191234")
        assert format_phone(partial) == partial

    def test_extra_digits_dropped(self):
        assert format_phone("119123456789") == "(11) 91234-5678"

    def test_fullwidth_digit_stripped(self):
        assert format_phone("(11) ９1234-5678") == "(11) 1234-5678"


class TestApplyMask:
    def test_appends_keystroke(self):
        assert apply_mask("529.982.24", "7", format_cpf) == "529.982.247"

    def test_pasted_text(self):
        assert apply_mask("", "11 91234 5678", format_phone) == "(11) 91234-5678"

    def test_none_values(self):
        assert apply_mask(None, None, format_phone) == ""


class TestCompletePhone:
    def test_mobile_complete(self):
        assert is_complete_phone("(11) 91234-5678")

    def test_landline_complete(self):
        assert is_complete_phone("(11) 2345-6789")

    def test_short_number_incomplete(self):
        assert not is_complete_phone("(11) 234-5678")
