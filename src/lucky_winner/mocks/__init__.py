from .mock_vrf_coordinator import MockVRFCoordinator

__all__ = ["MockVRFCoordinator"]
