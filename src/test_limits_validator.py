"""
test_limits_validator.py
Purpose: substring scan of limits.conf lines for the memlock / rtprio grants.
"""

import pytest

from rtsetup.validators.limits_validator import memlock_line_ok, rtprio_line_ok, scan_limits

GROUP = "@psychtoolbox"
MEMLOCK = "@psychtoolbox     -     memlock     unlimited"
RTPRIO = "@psychtoolbox     -     rtprio      50"


def test_both_lines_present():
    scan = scan_limits(["# header", MEMLOCK, RTPRIO], GROUP)
    assert scan.memlock_ok and scan.rtprio_ok
    assert scan.configured


def test_empty_file_is_unconfigured():
    scan = scan_limits([], GROUP)
    assert not scan.memlock_ok
    assert not scan.rtprio_ok
    assert not scan.configured


@pytest.mark.parametrize("missing", ["@psychtoolbox", "memlock", "unlimited", "-"])
def test_memlock_requires_every_token(missing):
    assert memlock_line_ok(MEMLOCK, GROUP)
    broken = MEMLOCK.replace(missing, " ")
    assert not memlock_line_ok(broken, GROUP)
    assert not scan_limits([broken, RTPRIO], GROUP).memlock_ok


@pytest.mark.parametrize("missing", ["@psychtoolbox", "rtprio", "50", "-"])
def test_rtprio_requires_every_token(missing):
    assert rtprio_line_ok(RTPRIO, GROUP)
    broken = RTPRIO.replace(missing, " ")
    assert not rtprio_line_ok(broken, GROUP)
    assert not scan_limits([MEMLOCK, broken], GROUP).rtprio_ok


def test_conditions_are_independent():
    scan = scan_limits([MEMLOCK], GROUP)
    assert scan.memlock_ok
    assert not scan.rtprio_ok
    assert not scan.configured


def test_tokens_may_appear_in_any_order():
    # hyphen heuristic: any "-" satisfies the limit-type token
    scan = scan_limits(["memlock unlimited for @psychtoolbox-members"], GROUP)
    assert scan.memlock_ok


def test_other_group_does_not_count():
    scan = scan_limits(["@audio - memlock unlimited", "@audio - rtprio 95"], GROUP)
    assert not scan.memlock_ok
    assert not scan.rtprio_ok


def test_grants_split_across_lines_do_not_combine():
    lines = ["@psychtoolbox memlock unlimited", "-"]
    assert not scan_limits(lines, GROUP).memlock_ok
