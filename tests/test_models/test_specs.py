"""Tests for resource specification models."""

import pytest
from pydantic import ValidationError

from convoy.models import AgentConfig, ContainerSpec, DesiredState, NetworkSpec, VolumeSpec
from convoy.models.container import to_api


class TestVolumeSpec:
    """Test VolumeSpec model."""

    def test_defaults(self):
        spec = VolumeSpec(name="data")

        assert spec.driver == "local"
        assert spec.labels == {}
        assert spec.driver_opts == {}

    def test_docker_aliases(self):
        spec = VolumeSpec.model_validate({"Name": "data", "Driver": "nfs", "DriverOpts": {"o": "addr=1.2.3.4"}})

        assert spec.driver == "nfs"
        assert spec.driver_opts == {"o": "addr=1.2.3.4"}

    def test_name_required(self):
        with pytest.raises(ValidationError):
            VolumeSpec.model_validate({"Driver": "local"})

    def test_immutable(self):
        spec = VolumeSpec(name="data")

        with pytest.raises(ValidationError):
            spec.name = "other"


class TestNetworkSpec:
    """Test NetworkSpec model."""

    def test_defaults(self):
        spec = NetworkSpec(name="net-a")

        assert spec.driver == "bridge"
        assert spec.enable_ipv6 is False
        assert spec.ipam is None

    def test_ipam_pools(self):
        spec = NetworkSpec.model_validate({
            "name": "net-a",
            "IPAM": {"Driver": "default", "Config": [{"Subnet": "10.0.0.0/24", "IPRange": "10.0.0.0/25"}]},
        })

        assert spec.ipam.config[0].subnet == "10.0.0.0/24"
        assert spec.ipam.config[0].ip_range == "10.0.0.0/25"

    @pytest.mark.parametrize("key", ["AuxiliaryAddresses", "AuxAddress", "aux_addresses"])
    def test_auxiliary_addresses(self, key):
        """Auxiliary addresses use the Docker API key; the short form is still read."""
        spec = NetworkSpec.model_validate({
            "name": "n",
            "IPAM": {"Config": [{"Subnet": "10.0.0.0/24", key: {"host1": "10.0.0.5"}}]},
        })

        pool = spec.ipam.config[0]
        assert pool.aux_addresses == {"host1": "10.0.0.5"}
        assert pool.model_dump(by_alias=True)["AuxiliaryAddresses"] == {"host1": "10.0.0.5"}


class TestContainerSpec:
    """Test ContainerSpec model."""

    def test_minimal_container_spec(self):
        spec = ContainerSpec.model_validate({"name": "web", "Config": {"Image": "nginx"}})

        assert spec.image == "nginx"
        assert to_api(spec.host_config) == {}
        assert to_api(spec.networking_config) == {}

    def test_api_payload_uses_docker_keys(self):
        spec = ContainerSpec.model_validate({
            "name": "web",
            "config": {"image": "nginx", "cmd": ["nginx"], "StopSignal": "SIGQUIT"},
            "host_config": {"privileged": True, "restart_policy": {"name": "always"}},
        })

        assert to_api(spec.config) == {"Image": "nginx", "Cmd": ["nginx"], "StopSignal": "SIGQUIT"}
        assert to_api(spec.host_config) == {"Privileged": True, "RestartPolicy": {"Name": "always"}}

    @pytest.mark.parametrize("name", ["web", "web-1", "db_primary", "a.b"])
    def test_valid_names(self, name):
        assert ContainerSpec.model_validate({"name": name, "Config": {"Image": "x"}}).name == name

    @pytest.mark.parametrize("name", ["", "/web", "-web", "web app"])
    def test_invalid_names(self, name):
        with pytest.raises(ValidationError):
            ContainerSpec.model_validate({"name": name, "Config": {"Image": "x"}})

    def test_image_required(self):
        with pytest.raises(ValidationError) as exc_info:
            ContainerSpec.model_validate({"name": "web", "Config": {}})

        assert "Image" in str(exc_info.value)


class TestDesiredState:
    """Test the DesiredState aggregate."""

    def test_fingerprint_is_stable(self):
        first = DesiredState(volumes=[VolumeSpec(name="data")], networks={"n": NetworkSpec(name="n")})
        second = DesiredState(volumes=[VolumeSpec(name="data")], networks={"n": NetworkSpec(name="n")})

        assert first.fingerprint() == second.fingerprint()

    def test_fingerprint_changes_with_content(self):
        first = DesiredState(volumes=[VolumeSpec(name="data")])
        second = DesiredState(volumes=[VolumeSpec(name="data", labels={"a": "b"})])

        assert first.fingerprint() != second.fingerprint()

    def test_read_only(self):
        state = DesiredState()

        with pytest.raises(ValidationError):
            state.volumes = []


class TestAgentConfig:
    """Test AgentConfig model."""

    def test_defaults(self):
        config = AgentConfig()

        assert config.poll_interval == 30
        assert config.stop_timeout == 30
        assert config.legacy_network_short_circuit is False
        assert config.recreate == "on_change"
        assert config.pull_images is True

    def test_log_level_normalized(self):
        assert AgentConfig(log_level="debug").log_level == "DEBUG"

    @pytest.mark.parametrize("field, value", [
        ("log_level", "LOUD"),
        ("poll_interval", 0),
        ("stop_timeout", -1),
        ("recreate", "never"),
    ])
    def test_invalid_values(self, field, value):
        with pytest.raises(ValidationError):
            AgentConfig(**{field: value})
