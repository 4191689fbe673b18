"""Test Kubernetes client functionality."""

import os
import sys

import pytest
from unittest.mock import patch, MagicMock
from subprocess import CalledProcessError

from k8s_collector.exceptions import KubectlNotFoundError
from k8s_collector.k8s.client import KubectlClient, parse_api_resources


class TestKubectlClient:
    @patch("subprocess.run")
    def test_kubectl_verification_success(self, mock_run):
        """Test successful kubectl verification."""
        mock_run.return_value = MagicMock(
            stdout='{"clientVersion": {"major": "1", "minor": "28"}}', stderr="", returncode=0
        )

        client = KubectlClient()
        assert client is not None

    @patch("subprocess.run")
    def test_kubectl_verification_failure(self, mock_run):
        """Test kubectl verification failure."""
        mock_run.side_effect = FileNotFoundError()

        with pytest.raises(KubectlNotFoundError, match="kubectl command not found"):
            KubectlClient()

    @patch("subprocess.run")
    def test_build_command_with_context_and_namespace(self, mock_run):
        """Test building command with context and namespace."""
        mock_run.return_value = MagicMock(stdout="{}", stderr="", returncode=0)
        client = KubectlClient(context="test-context", namespace="demo")
        cmd = client._build_command(["get", "pods"])
        assert cmd == ["kubectl", "--context", "test-context", "get", "pods", "-n", "demo"]

    @patch("subprocess.run")
    def test_execute_failure_returns_stderr(self, mock_run):
        """Test failed command execution."""
        client_ok = MagicMock(stdout="{}", stderr="", returncode=0)
        mock_run.side_effect = [
            client_ok,
            CalledProcessError(1, "kubectl", stderr="Error message"),
        ]

        client = KubectlClient()
        success, output = client.execute(["get", "pods"])

        assert success is False
        assert "Error message" in output

    @patch("subprocess.run")
    def test_execute_missing_binary_is_fatal(self, mock_run):
        """Test that losing kubectl mid-run raises instead of returning."""
        mock_run.side_effect = [
            MagicMock(stdout="{}", stderr="", returncode=0),
            FileNotFoundError(),
        ]

        client = KubectlClient()
        with pytest.raises(KubectlNotFoundError):
            client.execute(["get", "pods"])

    @patch("subprocess.run")
    def test_list_names_strips_kind_prefix(self, mock_run):
        """Test listing instance names."""
        mock_run.return_value = MagicMock(
            stdout="deployment.apps/web\ndeployment.apps/worker\n", stderr="", returncode=0
        )

        client = KubectlClient(namespace="demo")
        assert client.list_names("deployments") == ["web", "worker"]
        assert mock_run.call_args[0][0] == [
            "kubectl", "get", "deployments", "-o", "name", "-n", "demo"
        ]

    @patch("subprocess.run")
    def test_list_names_failure_is_empty(self, mock_run):
        """Test that a failed listing yields no instances."""
        mock_run.side_effect = [
            MagicMock(stdout="{}", stderr="", returncode=0),
            CalledProcessError(1, "kubectl", stderr="connection refused"),
        ]

        client = KubectlClient(namespace="demo")
        assert client.list_names("pods") == []

    @patch("subprocess.run")
    def test_logs_and_events_commands(self, mock_run):
        """Test the arguments of log and event fetches."""
        mock_run.return_value = MagicMock(stdout="", stderr="", returncode=0)
        client = KubectlClient(namespace="demo")

        client.logs("web-0", "app")
        assert mock_run.call_args[0][0] == ["kubectl", "logs", "web-0", "-c", "app", "-n", "demo"]

        client.get_events(sort_by=".lastTimestamp")
        assert mock_run.call_args[0][0] == [
            "kubectl", "get", "events", "--sort-by=.lastTimestamp", "-o", "wide", "-n", "demo"
        ]

        client.get_events(output="json")
        assert mock_run.call_args[0][0] == [
            "kubectl", "get", "events", "-o", "json", "-n", "demo"
        ]


class TestApiResources:
    def test_parse_api_resources(self, fake_client):
        """Test parsing the api-resources table, with and without short names."""
        resources = parse_api_resources(fake_client().api_resources)

        assert [r["name"] for r in resources] == ["pods", "deployments", "certificates", "issuers"]
        assert resources[2]["shortnames"] == ["cert", "certs"]
        assert resources[2]["group"] == "cert-manager.io"
        assert resources[3]["shortnames"] == []
        assert resources[3]["kind"] == "Issuer"
        assert resources[0]["group"] == ""

    @pytest.mark.parametrize(
        "name", ["certificates", "cert", "Certificate", "certificates.cert-manager.io", "issuers"]
    )
    def test_has_resource_kind_known(self, name, fake_client):
        """Test matching by name, short name, kind and qualified name."""
        resources = parse_api_resources(fake_client().api_resources)
        assert KubectlClient.has_resource_kind(name, resources) is True

    @pytest.mark.parametrize("name", ["certificate-requests", "cer", "", "widgets"])
    def test_has_resource_kind_unknown(self, name, fake_client):
        """Test that partial or unknown names do not match."""
        resources = parse_api_resources(fake_client().api_resources)
        assert KubectlClient.has_resource_kind(name, resources) is False


@pytest.mark.integration
@pytest.mark.skipif(sys.platform == "win32", reason="needs a POSIX shell script on PATH")
class TestKubectlOutputDecoding:
    def test_logs_with_invalid_utf8_bytes(self, tmp_path, monkeypatch):
        """Test that a log holding raw binary bytes is still returned in full."""
        script = tmp_path / "kubectl"
        script.write_text(
            "#!/bin/sh\n"
            'if [ "$1" = "logs" ]; then\n'
            "  printf 'INFO start\\n\\377\\376 binary chunk\\nERROR: connection refused\\n'\n"
            "fi\n"
        )
        script.chmod(0o755)
        monkeypatch.setenv("PATH", f"{tmp_path}{os.pathsep}{os.environ.get('PATH', '')}")

        client = KubectlClient(namespace="demo")
        success, output = client.logs("web-0", "app")

        assert success is True
        lines = output.split("\n")
        assert lines[0] == "INFO start"
        assert lines[1] == "\ufffd\ufffd binary chunk"
        assert lines[2] == "ERROR: connection refused"
