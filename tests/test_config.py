import pytest

from app.config import env_flag


class TestEnvFlag:
    @pytest.mark.parametrize("value", ["1", "true", "TRUE", " yes "])
    def test_truthy_values(self, monkeypatch, value):
        monkeypatch.setenv("QUIZ_FLAG", value)

        assert env_flag("QUIZ_FLAG") is True

    @pytest.mark.parametrize("value", ["0", "false", "no", ""])
    def test_other_values_are_off(self, monkeypatch, value):
        monkeypatch.setenv("QUIZ_FLAG", value)

        assert env_flag("QUIZ_FLAG", default=True) is False

    def test_unset_uses_default(self, monkeypatch):
        monkeypatch.delenv("QUIZ_FLAG", raising=False)

        assert env_flag("QUIZ_FLAG") is False
        assert env_flag("QUIZ_FLAG", default=True) is True
