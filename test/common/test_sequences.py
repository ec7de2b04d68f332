# This file is part of dmoji.
#
# SPDX-License-Identifier: GPL-3.0-only

import unittest

from dmoji.common.const import EmojiCategory
from dmoji.common.exceptions import ParseError
from dmoji.common.index import load
from dmoji.common.matcher import query
from dmoji.common.sequences import description_from_comment
from dmoji.common.sequences import is_glyph
from dmoji.common.sequences import iter_sequences
from dmoji.common.sequences import parse_codepoint
from dmoji.common.sequences import parse_sequences

from test.common.sample_data import LEGACY_SEQUENCES
from test.common.sample_data import SEQUENCES
from test.common.sample_data import ZWJ_SEQUENCES


class TestParseSequences(unittest.TestCase):

    def test_single_codepoint_with_name_in_comment(self) -> None:
        records = parse_sequences('1F600 ; Basic_Emoji ; # 😀 grinning face')
        self.assertEqual(len(records), 1)
        record = records[0]
        self.assertEqual(record.codepoints, (0x1F600,))
        self.assertEqual(record.category, EmojiCategory.BASIC)
        self.assertIn('grinning face', record.description)
        self.assertEqual(record.text, '😀')

    def test_range_expands_to_one_record_per_codepoint(self) -> None:
        records = parse_sequences(
            '1F3FB..1F3FF ; Emoji_Modifier ; # skin tone modifiers')
        self.assertEqual([r.codepoints for r in records],
                         [(cp,) for cp in range(0x1F3FB, 0x1F400)])
        self.assertTrue(all(r.category == EmojiCategory.MODIFIER
                            for r in records))
        self.assertEqual([r.description for r in records],
                         ['skin tone modifiers 0', 'skin tone modifiers 1',
                          'skin tone modifiers 2', 'skin tone modifiers 3',
                          'skin tone modifiers 4'])

    def test_range_members_keep_the_file_description(self) -> None:
        records = parse_sequences(SEQUENCES)
        self.assertEqual(records[0].description, 'watch..hourglass done 0')
        self.assertEqual(records[1].description, 'watch..hourglass done 1')

    def test_range_members_without_description(self) -> None:
        records = parse_sequences('E000..E001 ; Basic_Emoji ;')
        self.assertEqual([r.description for r in records], ['', ''])

    def test_range_members_are_searchable(self) -> None:
        index = load('1F3FB..1F3FF ; Emoji_Modifier ; # skin tone modifiers',
                     '')
        candidates = query(index, 'skin tone')
        self.assertEqual(sorted(c.record.codepoints for c in candidates),
                         [(cp,) for cp in range(0x1F3FB, 0x1F400)])

        index = load(SEQUENCES, '')
        candidates = query(index, 'hourglass done')
        self.assertEqual([c.record.text for c in candidates[:2]],
                         ['\u231a', '\u231b'])

    def test_current_file_format(self) -> None:
        records = parse_sequences(SEQUENCES, 'emoji-sequences.txt')
        self.assertEqual(len(records), 9)

        descriptions = [r.description for r in records]
        self.assertIn('grinning face', descriptions)
        self.assertIn('flag: Germany', descriptions)
        self.assertIn('keycap: #', descriptions)

        by_name = {r.description: r for r in records}
        self.assertEqual(by_name['red heart'].codepoints, (0x2764, 0xFE0F))
        self.assertEqual(by_name['keycap: #'].category, EmojiCategory.KEYCAP)
        self.assertEqual(by_name['flag: England'].category, EmojiCategory.TAG)
        self.assertEqual(by_name['flag: England'].codepoints[0], 0x1F3F4)
        self.assertEqual(by_name['thumbs up: light skin tone'].category,
                         EmojiCategory.MODIFIER)

    def test_zwj_file(self) -> None:
        records = parse_sequences(ZWJ_SEQUENCES)
        self.assertEqual(len(records), 2)
        self.assertEqual(records[0].category, EmojiCategory.ZWJ)
        self.assertEqual(records[0].text, '\U0001F468\u200d\U0001F4BB')
        self.assertEqual(records[1].description, 'polar bear')

    def test_legacy_file_format(self) -> None:
        records = parse_sequences(LEGACY_SEQUENCES)
        self.assertEqual(len(records), 7)
        self.assertEqual(records[0].description, 'grinning face')
        self.assertEqual(records[-1].description, 'flag: Ascension Island')
        self.assertEqual(records[-1].category, EmojiCategory.FLAG)

    def test_round_trip_to_hex(self) -> None:
        for line in SEQUENCES.splitlines():
            data = line.partition('#')[0]
            if not data.strip():
                continue

            field = data.split(';')[0].strip()
            if '..' in field:
                low, high = (int(v, 16) for v in field.split('..'))
                expected = {cp for cp in range(low, high + 1)}
            else:
                expected = {int(v, 16) for v in field.split()}

            records = parse_sequences(line)
            found = {int(v, 16) for r in records for v in r.hex.split()}
            self.assertEqual(found, expected, line)

    def test_lowercase_hex(self) -> None:
        records = parse_sequences('1f600 ; Basic_Emoji ; grinning face')
        self.assertEqual(records[0].codepoints, (0x1F600,))

    def test_skips_blank_and_comment_lines(self) -> None:
        text = '\n# comment\n   \n   # indented comment\n'
        self.assertEqual(parse_sequences(text), [])

    def test_iter_sequences_is_lazy(self) -> None:
        text = '1F600 ; Basic_Emoji ; grinning face\nXYZ ; Basic_Emoji ; bad'
        records = iter_sequences(text)
        self.assertEqual(next(records).description, 'grinning face')
        with self.assertRaises(ParseError):
            next(records)


class TestParseErrors(unittest.TestCase):

    def assertParseError(self, text: str, line: int = 1) -> ParseError:
        with self.assertRaises(ParseError) as context:
            parse_sequences(text, 'emoji-sequences.txt')
        error = context.exception
        self.assertEqual(error.line, line)
        self.assertEqual(error.source, 'emoji-sequences.txt')
        self.assertIn('emoji-sequences.txt:%s' % line, str(error))
        return error

    def test_malformed_hex(self) -> None:
        error = self.assertParseError('1F60G ; Basic_Emoji ; bad face')
        self.assertEqual(error.raw, '1F60G ; Basic_Emoji ; bad face')
        self.assertIn('malformed codepoint', error.reason)

    def test_missing_category(self) -> None:
        error = self.assertParseError('\n\n1F600 # grinning face', line=3)
        self.assertIn('missing category', error.reason)

    def test_empty_category(self) -> None:
        self.assertParseError('1F600 ;   ; grinning face')

    def test_unknown_category(self) -> None:
        error = self.assertParseError('1F600 ; Fancy_Emoji ; grinning face')
        self.assertIn('Fancy_Emoji', error.reason)

    def test_category_is_case_sensitive(self) -> None:
        self.assertParseError('1F600 ; basic_emoji ; grinning face')

    def test_missing_codepoints(self) -> None:
        self.assertParseError(' ; Basic_Emoji ; nothing')

    def test_reversed_range(self) -> None:
        error = self.assertParseError('1F3FF..1F3FB ; Basic_Emoji ; tones')
        self.assertIn('empty range', error.reason)

    def test_open_range(self) -> None:
        self.assertParseError('1F3FB.. ; Basic_Emoji ; tones')

    def test_out_of_range_values(self) -> None:
        self.assertParseError('110000 ; Basic_Emoji ; too large')
        self.assertParseError('D800 ; Basic_Emoji ; surrogate')

    def test_line_number_counts_skipped_lines(self) -> None:
        text = '# header\n\n1F600 ; Basic_Emoji ; ok\n1F601 ; Nope ; bad\n'
        self.assertParseError(text, line=4)


class TestHelpers(unittest.TestCase):

    def test_parse_codepoint(self) -> None:
        self.assertEqual(parse_codepoint('23'), 0x23)
        self.assertEqual(parse_codepoint('10FFFF'), 0x10FFFF)
        with self.assertRaises(ValueError):
            parse_codepoint('0x23')
        with self.assertRaises(ValueError):
            parse_codepoint('1234567')

    def test_description_from_comment(self) -> None:
        cases = [
            (' 😀 grinning face', 'grinning face'),
            ('E1.0   [1] (😀) grinning face', 'grinning face'),
            ('6.0 [1] (🇦🇨) flag: Ascension Island', 'flag: Ascension Island'),
            ('E0.6 [1] (#️⃣) keycap: #', 'keycap: #'),
            ('1.1 [1] (1️⃣) keycap: 1', 'keycap: 1'),
            ('E0.6   [2] (⌚..⌛)', ''),
            ('skin tone modifiers', 'skin tone modifiers'),
            ('', ''),
        ]
        for comment, expected in cases:
            self.assertEqual(description_from_comment(comment), expected,
                             comment)

    def test_is_glyph(self) -> None:
        self.assertTrue(is_glyph('😀'))
        self.assertTrue(is_glyph('1️⃣'))
        self.assertTrue(is_glyph('🇩🇪'))
        self.assertFalse(is_glyph('face'))
        self.assertFalse(is_glyph('1.0'))
        self.assertFalse(is_glyph(''))


if __name__ == '__main__':
    unittest.main()
