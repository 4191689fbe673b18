"""Kubernetes client wrapper."""

import subprocess
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..exceptions import KubectlNotFoundError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class KubectlClient:
    """Wrapper for the kubectl commands used to snapshot a namespace."""

    def __init__(self, context: Optional[str] = None, namespace: Optional[str] = None):
        self.context = context
        self.namespace = namespace
        self._verify_kubectl()

    def _verify_kubectl(self):
        """Verify kubectl is available and configured."""
        try:
            subprocess.run(
                ["kubectl", "version", "--client", "-o", "json"],
                capture_output=True,
                text=True,
                check=True,
            )
            logger.debug("kubectl verified successfully")
        except FileNotFoundError:
            raise KubectlNotFoundError("kubectl command not found. Please install kubectl.")
        except subprocess.CalledProcessError:
            logger.warning("kubectl verification failed")

    def _build_command(self, args: List[str]) -> List[str]:
        """Build kubectl command with context and namespace."""
        cmd = ["kubectl"]

        if self.context:
            cmd.extend(["--context", self.context])

        cmd.extend(args)

        if self.namespace and "--all-namespaces" not in args and "-n" not in args:
            cmd.extend(["-n", self.namespace])

        return cmd

    def execute(self, args: List[str]) -> Tuple[bool, str]:
        """Execute kubectl command and return success status and output.

        On a non-zero exit the output is kubectl's stderr. A missing binary
        raises ``KubectlNotFoundError`` instead of returning.
        """
        cmd = self._build_command(args)
        logger.debug(f"Executing: {' '.join(cmd)}")

        try:
            # Container logs may carry arbitrary bytes
            result = subprocess.run(
                cmd, capture_output=True, encoding="utf-8", errors="replace", check=True
            )
            return True, result.stdout
        except subprocess.CalledProcessError as e:
            logger.debug(f"Command failed: {e.stderr}")
            return False, e.stderr or ""
        except FileNotFoundError:
            raise KubectlNotFoundError("kubectl command not found. Please install kubectl.")

    def list_names(self, resource_type: str) -> List[str]:
        """List instance names of a resource type; a failed listing is empty."""
        success, output = self.execute(["get", resource_type, "-o", "name"])
        if not success:
            return []
        # "deployment.apps/web" -> "web"
        return [line.split("/")[-1] for line in output.split() if line.strip()]

    def get_listing(self, resource_type: str) -> Tuple[bool, str]:
        """Get the wide table listing of a resource type."""
        return self.execute(["get", resource_type, "-o", "wide"])

    def describe(self, resource_type: str, name: str) -> Tuple[bool, str]:
        """Describe a single instance."""
        return self.execute(["describe", resource_type, name])

    def get_yaml(self, resource_type: str, name: str) -> Tuple[bool, str]:
        """Get a single instance as YAML."""
        return self.execute(["get", resource_type, name, "-o", "yaml"])

    def logs(self, pod: str, container: str) -> Tuple[bool, str]:
        """Get the log stream of one container."""
        return self.execute(["logs", pod, "-c", container])

    def get_events(self, sort_by: Optional[str] = None, output: str = "wide") -> Tuple[bool, str]:
        """Get namespace events, optionally sorted by a field path."""
        args = ["get", "events"]
        if sort_by:
            args.append(f"--sort-by={sort_by}")
        args.extend(["-o", output])
        return self.execute(args)

    def get_api_resources(self) -> List[Dict[str, Any]]:
        """Get available API resources."""
        success, output = self.execute(["api-resources"])
        if not success:
            return []
        return parse_api_resources(output)

    @staticmethod
    def has_resource_kind(name: str, api_resources: Iterable[Dict[str, Any]]) -> bool:
        """Check whether ``name`` refers to a resource kind known to the cluster."""
        wanted = name.strip().lower()
        if not wanted:
            return False

        for resource in api_resources:
            resource_name = resource.get("name", "").lower()
            group = resource.get("group", "")
            candidates = {resource_name, resource.get("kind", "").lower()}
            candidates.update(s.lower() for s in resource.get("shortnames", []))
            if group:
                candidates.add(f"{resource_name}.{group.lower()}")
            if wanted in candidates:
                return True
        return False


def parse_api_resources(output: str) -> List[Dict[str, Any]]:
    """Parse the table printed by ``kubectl api-resources``.

    The SHORTNAMES column is often blank, so rows are read from the right:
    KIND, NAMESPACED and APIVERSION are always the last three fields.
    """
    resources = []
    lines = output.strip().split("\n")[1:]  # Skip header

    for line in lines:
        parts = line.split()
        if len(parts) < 4:
            continue

        name = parts[0]
        kind = parts[-1]
        namespaced = parts[-2].lower() == "true"
        api_version = parts[-3]
        shortnames = parts[1].split(",") if len(parts) >= 5 else []
        group = api_version.rsplit("/", 1)[0] if "/" in api_version else ""

        resources.append(
            {
                "name": name,
                "shortnames": shortnames,
                "kind": kind,
                "namespaced": namespaced,
                "apiVersion": api_version,
                "group": group,
            }
        )
    return resources
