"""Shared INI samples for the test suite."""

import pytest

from inidoc import load_string

COMPLEX = (
    '   ;comment1 \n'
    '\tdefkey1= defvalue1\n'
    '\tdefkey2=\n'
    'defkey3 = defvalue3 #comment2\n'
    '\n'
    '  [   section1   ] #seccomment1\n'
    '      key1 = value1  \n'
    'key2 = value2# comment3\n'
    '\n'
    '          # comment4\n'
    '\n'
    '[section2 ]\n'
    '\n'
    '[SECTION3] #seccomment2\n'
    's3key1 =\n'
    's3key2 = s3value2      # comment5\n'
    '\n'
    '[ 毚饯襃ブみょ ]\n'
    '䥵妦飌ぞ盯 = 覎びゅフォ駧橜 槞㨣\n'
    '\n'
    '[test2]\n'
    'test=foo\n'
    '[test3]\n'
    '\n'
    'test=bar\n'
    '\t'
)

SPACED = (
    ' #com1  \n'
    '\t[sect1 ] ;com2\n'
    '  k1 = v1  ;com3\n'
    '  k2=   \n'
    '  k3 = v3\n'
    '\n'
    '  [ sect2 ]\n'
    '  [sect3]\n'
    '  k4= v4 \n'
    '\t  \n'
)


@pytest.fixture
def complex_doc():
    return load_string(COMPLEX)


@pytest.fixture
def spaced_doc():
    return load_string(SPACED)
