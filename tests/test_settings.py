import pytest

from gridview.settings import Settings


def noop_update(_value):
    pass


def noop_read():
    return None


def test_set_setting_handlers():
    settings = Settings()
    settings.set_setting_handlers("foo", noop_update, noop_read)
    assert settings.listener("foo") is noop_update
    assert settings.reader("foo") is noop_read


def test_set():
    settings = Settings()
    settings.set(1)
    assert settings.get(int) == 1

    settings.set(1.0)
    settings.set(2)

    assert settings.get(int) == 2
    assert settings.get(float) == 1.0


def test_get():
    settings = Settings()
    settings.set(1)
    settings.set(1.0)
    assert settings.get(int) == 1
    assert settings.get(float) == 1.0


def test_get_missing_type_raises():
    settings = Settings()
    with pytest.raises(KeyError):
        settings.get(str)


def test_get_returns_independent_copy():
    settings = Settings()
    settings.set([1, 2])
    first = settings.get(list)
    first.append(3)
    assert settings.get(list) == [1, 2]


def test_set_stores_a_copy():
    settings = Settings()
    original = {"a": 1}
    settings.set(original)
    original["a"] = 2
    assert settings.get(dict) == {"a": 1}


def test_handle_changed_notification_calls_listener():
    settings = Settings()
    received = []
    settings.set_setting_handlers("foo", received.append, noop_read)
    settings.handle_changed_notification(["foo", 42])
    assert received == [42]


def test_handle_changed_notification_unknown_name():
    settings = Settings()
    with pytest.raises(KeyError):
        settings.handle_changed_notification(["missing", 1])


def test_handle_changed_notification_name_not_string():
    settings = Settings()
    settings.set_setting_handlers("foo", noop_update, noop_read)
    with pytest.raises(TypeError):
        settings.handle_changed_notification([7, 1])


def test_handle_changed_notification_too_few_arguments():
    settings = Settings()
    with pytest.raises(ValueError):
        settings.handle_changed_notification(["foo"])


def test_reader_missing_raises():
    settings = Settings()
    with pytest.raises(KeyError):
        settings.reader("foo")


def test_handlers_replace_earlier_registration():
    settings = Settings()
    received = []
    settings.set_setting_handlers("foo", noop_update, noop_read)
    settings.set_setting_handlers("foo", received.append, noop_read)
    settings.handle_changed_notification(["foo", "bar"])
    assert received == ["bar"]