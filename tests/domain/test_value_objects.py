"""Tests for value objects."""

import pytest
from keel.domain.value_objects.release_name import is_valid_release_name
from keel.domain.value_objects.control_node import ControlNode


class TestReleaseName:
    @pytest.mark.parametrize("name", ["app", "a", "my-app", "my_app.v2", "A1", "x-1-y"])
    def test_valid(self, name):
        assert is_valid_release_name(name)

    @pytest.mark.parametrize("name", ["", "-app", "app-", "app_", ".app", "my app", "app/x"])
    def test_invalid(self, name):
        assert not is_valid_release_name(name)


class TestControlNode:
    @pytest.mark.parametrize(
        "address",
        ["deploy@10.0.0.5:2222", "bastion.example.com", "admin@[::1]:2200", "ops@host"],
    )
    def test_valid(self, address):
        node = ControlNode(address)
        assert str(node) == address

    @pytest.mark.parametrize(
        "address", ["", "@example.com", "ops@", ":22", "ops@:22", "ops @host"]
    )
    def test_invalid(self, address):
        with pytest.raises(ValueError, match="Invalid control node address"):
            ControlNode(address)
