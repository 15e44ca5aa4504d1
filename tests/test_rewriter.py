from dataclasses import replace

from translint.core.models import SourceText
from translint.patterns.translation import (
    MultiLineStringRewriter,
    find_multiline_strings,
    merge_multiline_strings,
)


def fix_text(text, findings=None):
    rewriter = MultiLineStringRewriter()
    source = SourceText.from_text(text)
    if findings is None:
        findings = rewriter.findings(source)
    result = rewriter.fix(source, findings)
    return source.text, result


def test_surrounding_content_is_preserved():
    fixed, result = fix_text('prefix _("a\nb") suffix')
    assert fixed == 'prefix _("a b") suffix'
    assert result.applied == 1
    assert result.changed


def test_fixed_span_rescans_clean():
    text = 'head\n<p>{{ _("one\n  two\n  three") }}</p>\ntail'
    fixed, _ = fix_text(text)
    assert fixed == 'head\n<p>{{ _("one two three") }}</p>\ntail'
    assert find_multiline_strings(fixed) == []


def test_fix_is_idempotent():
    once = merge_multiline_strings('{{ _(\'x\ny\') }}\n')
    assert once == "{{ _('x y') }}\n"
    assert merge_multiline_strings(once) == once


def test_two_findings_fixed_regardless_of_input_order():
    text = 'a {{ _("one\ntwo") }}\nkeep\nb {{ _("three\nfour\nfive") }}\nend'
    expected = 'a {{ _("one two") }}\nkeep\nb {{ _("three four five") }}\nend'
    findings = find_multiline_strings(text)
    assert len(findings) == 2

    fixed_forward, _ = fix_text(text, findings)
    fixed_reversed, _ = fix_text(text, list(reversed(findings)))
    assert fixed_forward == expected
    assert fixed_reversed == expected


def test_stale_findings_are_skipped():
    text = '{{ _("a\nb") }}'
    (finding,) = find_multiline_strings(text)
    stale = replace(finding, start_line=5, end_line=7)
    fixed, result = fix_text(text, [stale])
    assert fixed == text
    assert result.applied == 0
    assert result.skipped == [stale]
    assert not result.changed


def test_finding_no_longer_matching_its_lines_is_skipped():
    (finding,) = find_multiline_strings('{{ _("a\nb") }}')
    fixed, result = fix_text("plain\ntext", [finding])
    assert fixed == "plain\ntext"
    assert result.skipped == [finding]


def test_overlapping_findings_merge_over_two_passes():
    text = '{{ _("a\nb _("c\nd") }}\nuntouched'
    first, result = fix_text(text)
    assert result.applied == 1
    assert len(result.skipped) == 1
    assert first == '{{ _("a\nb _("c d") }}\nuntouched'

    second, result = fix_text(first)
    assert result.applied == 1
    assert second == '{{ _("a b _("c d") }}\nuntouched'
    assert find_multiline_strings(second) == []


def test_lines_outside_spans_are_untouched():
    text = 'one\r\n{{ _("a\r\nb") }}\r\nthree\r\n'
    fixed, _ = fix_text(text)
    assert fixed == 'one\r\n{{ _("a b") }}\r\nthree\r\n'


CHAIN = '{{ _("a\nb") }} {{ _("c\nd") }} {{ _("e\nf") }} {{ _("g\nh") }}\n'


def test_spans_sharing_a_line_merge_in_one_call():
    findings = find_multiline_strings(CHAIN)
    assert [(f.start_line, f.end_line) for f in findings] == [(1, 2), (2, 3), (3, 4), (4, 5)]

    fixed, result = fix_text(CHAIN, findings)
    assert result.applied == 4
    assert result.skipped == []
    assert fixed == '{{ _("a b") }} {{ _("c d") }} {{ _("e f") }} {{ _("g h") }}\n'


def test_merge_multiline_strings_repeats_until_clean():
    merged = merge_multiline_strings('{{ _("a\nb _("c\nd") }}\nuntouched')
    assert merged == '{{ _("a b _("c d") }}\nuntouched'
    assert find_multiline_strings(merged) == []
