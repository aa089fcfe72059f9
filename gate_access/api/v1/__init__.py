from .gate_controller import router as gate_router


__all__ = ["gate_router"]
