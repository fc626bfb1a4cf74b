"""Kubernetes client wrapper."""

import json
import subprocess
from pathlib import Path
from typing import List, Tuple, Optional, Dict, Any

from ..errors import NotFoundError, StoreError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class K8sClient:
    """Wrapper for kubectl commands against the management cluster."""

    def __init__(self, kubeconfig: Optional[Path] = None, context: Optional[str] = None):
        self.kubeconfig = Path(kubeconfig).expanduser() if kubeconfig else None
        self.context = context
        self._verify_kubectl()

    def _verify_kubectl(self):
        """Verify kubectl is available."""
        try:
            subprocess.run(
                ["kubectl", "version", "--client", "-o", "json"],
                capture_output=True,
                text=True,
                check=True,
            )
            logger.debug("kubectl verified successfully")
        except FileNotFoundError:
            raise RuntimeError("kubectl command not found. Please install kubectl.")
        except subprocess.CalledProcessError:
            logger.warning("kubectl verification failed")

    def _build_command(self, args: List[str]) -> List[str]:
        """Build kubectl command with kubeconfig and context."""
        cmd = ["kubectl"]

        if self.kubeconfig:
            cmd.extend(["--kubeconfig", str(self.kubeconfig)])

        if self.context:
            cmd.extend(["--context", self.context])

        cmd.extend(args)
        return cmd

    def execute(self, args: List[str], stdin: Optional[str] = None) -> Tuple[bool, str]:
        """Execute kubectl command and return success status and output."""
        cmd = self._build_command(args)
        logger.debug(f"Executing: {' '.join(cmd)}")

        try:
            result = subprocess.run(
                cmd, input=stdin, capture_output=True, text=True, check=True
            )
            return True, result.stdout
        except subprocess.CalledProcessError as e:
            logger.error(f"Command failed: {e.stderr}")
            return False, e.stderr

    def run(self, args: List[str], stdin: Optional[str] = None) -> str:
        """Execute kubectl command, raising StoreError on failure."""
        success, output = self.execute(args, stdin=stdin)
        if success:
            return output

        message = (output or "").strip() or f"kubectl {' '.join(args)} failed"
        if "(NotFound)" in message:
            raise NotFoundError(message)
        raise StoreError(message)

    def get_json(
        self,
        resource_type: str,
        name: Optional[str] = None,
        namespace: Optional[str] = None,
        selector: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Get resource(s) as JSON."""
        args = ["get", resource_type]

        if name:
            args.append(name)

        if namespace:
            args.extend(["-n", namespace])

        if selector:
            args.extend(["-l", selector])

        args.extend(["-o", "json"])

        output = self.run(args)
        try:
            return json.loads(output)
        except json.JSONDecodeError:
            logger.error("Failed to parse JSON output")
            raise StoreError(f"unparsable output from kubectl {' '.join(args)}")
