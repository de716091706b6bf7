from datetime import datetime, timezone

import snowcord


def test_undefined_is_hashable():
    assert hash(snowcord.UNDEFINED) == hash(snowcord.UNDEFINED)
    assert {snowcord.UNDEFINED: 1}[snowcord.UNDEFINED] == 1
    assert not snowcord.UNDEFINED
    assert snowcord.UNDEFINED != 'UNDEFINED'
    assert repr(snowcord.UNDEFINED) == 'UNDEFINED'


def test_snowflake_time():
    # Discord's documented example snowflake
    assert snowcord.snowflake_time('175928847299117063') == datetime(
        2016, 4, 30, 11, 18, 25, 796000, tzinfo=timezone.utc
    )
    assert snowcord.snowflake_time(snowcord.time_snowflake(datetime(2024, 1, 1, tzinfo=timezone.utc))) == datetime(
        2024, 1, 1, tzinfo=timezone.utc
    )
