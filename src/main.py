"""
Replay tool for the tracking and line crossing engine.

This script feeds recorded per-frame detections through a CountingService
(centroid tracker followed by line crossing detector) and reports the
crossings and final counts.

Usage:
    python src/main.py --config config/config.yaml --input detections.yaml --width 640 --height 480

Arguments:
    --config: Path to configuration file
    --input: YAML file with recorded frames
    --width / --height: Frame size used to place the counting line
    --fps: Frame rate used to derive timestamps for frames that lack one
"""

import os
import sys
import argparse
import logging
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import yaml

from models.config import Config
from models.detection import Detection, detections_from_numpy
from ops.logging import setup_logging
from runtime.services import CountingService


VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively merge override into base and return base."""
    for k, v in (override or {}).items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v
    return base


def load_config(config_path: str) -> Dict[str, Any]:
    """
    Load configuration with layering:
    - `config/default.yaml` (checked in)
    - `config/config.yaml` (local overrides)
    - plus any explicitly provided `--config` path (treated as overrides)
    """
    try:
        base_path = os.path.join(os.path.dirname(config_path), "default.yaml")
        base_cfg: Dict[str, Any] = {}
        if os.path.exists(base_path):
            with open(base_path, "r") as f:
                base_cfg = yaml.safe_load(f) or {}

        local_overrides_path = os.path.join(os.path.dirname(config_path), "config.yaml")
        local_cfg: Dict[str, Any] = {}
        if os.path.exists(local_overrides_path):
            with open(local_overrides_path, "r") as f:
                local_cfg = yaml.safe_load(f) or {}

        merged = _deep_merge(base_cfg, local_cfg)

        if os.path.exists(config_path) and os.path.abspath(config_path) != os.path.abspath(local_overrides_path):
            with open(config_path, "r") as f:
                explicit_cfg = yaml.safe_load(f) or {}
            merged = _deep_merge(merged, explicit_cfg)

        return merged
    except (OSError, yaml.YAMLError) as e:
        logging.error(f"Failed to load configuration: {e}")
        sys.exit(1)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _validate_line(line: Any) -> Optional[str]:
    if _is_number(line):
        return None
    if (
        isinstance(line, list)
        and len(line) == 2
        and all(isinstance(p, list) and len(p) == 2 and all(_is_number(v) for v in p) for p in line)
    ):
        return None
    return "counting.line must be a number or [[x1, y1], [x2, y2]]"


def validate_config(config: Dict[str, Any]) -> Tuple[bool, Optional[str]]:
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary

    Returns:
        Tuple of (is_valid, error_message)
    """
    required_sections = ['tracking', 'counting', 'log_path', 'log_level']
    for section in required_sections:
        if section not in config:
            return False, f"Missing required configuration section: {section}"

    tracking = config.get('tracking') or {}
    if 'max_disappeared' in tracking:
        md = tracking['max_disappeared']
        if not isinstance(md, int) or isinstance(md, bool) or md < 0:
            return False, "tracking.max_disappeared must be a non-negative integer"
    if 'max_distance' in tracking:
        dist = tracking['max_distance']
        if not _is_number(dist) or dist <= 0:
            return False, "tracking.max_distance must be a positive number"

    counting = config.get('counting') or {}
    if 'line' in counting:
        error = _validate_line(counting['line'])
        if error:
            return False, error
    if 'cooldown_ms' in counting:
        cd = counting['cooldown_ms']
        if not isinstance(cd, int) or isinstance(cd, bool) or cd < 0:
            return False, "counting.cooldown_ms must be a non-negative integer"

    if not isinstance(config['log_path'], str) or not config['log_path']:
        return False, "log_path must be a non-empty string"
    log_level = config['log_level']
    if not isinstance(log_level, str) or log_level.upper() not in VALID_LOG_LEVELS:
        return False, f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}"

    return True, None


def load_frames(input_path: str, fps: float = 30.0) -> List[Tuple[float, List[Detection]]]:
    """
    Load recorded frames from YAML.

    Expected layout:
        frames:
          - timestamp: 0.0          # optional, seconds
            detections:
              - {bbox: [l, t, r, b], label: "ripe", confidence: 0.9}
            boxes: [[l, t, r, b, confidence]]   # optional compact form
            labels: ["unripe"]                  # labels for boxes, by position

    Returns:
        (timestamp, detections) per frame. Missing timestamps are index / fps.
    """
    with open(input_path, "r") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError("top level must be a mapping with a 'frames' list")

    frames = []
    for idx, frame in enumerate(data.get("frames") or []):
        frame = frame or {}
        if not isinstance(frame, dict):
            raise ValueError(f"frame {idx} must be a mapping")
        timestamp = float(frame.get("timestamp", idx / fps))
        detections = [_parse_detection(idx, d) for d in frame.get("detections") or []]
        if frame.get("boxes"):
            detections.extend(_parse_boxes(idx, frame["boxes"], frame.get("labels") or []))
        frames.append((timestamp, detections))
    return frames


def _parse_detection(frame_idx: int, d: Any) -> Detection:
    if not isinstance(d, dict):
        raise ValueError(f"frame {frame_idx}: detection must be a mapping")
    bbox = d.get("bbox")
    if not isinstance(bbox, list) or len(bbox) != 4:
        raise ValueError(f"frame {frame_idx}: bbox must be [left, top, right, bottom]")
    return Detection.from_dict(d)


def _parse_boxes(frame_idx: int, boxes: Any, labels: List[str]) -> List[Detection]:
    """Compact detector dump: rows of [left, top, right, bottom(, confidence)]."""
    arr = np.asarray(boxes, dtype=float)
    if arr.ndim != 2 or arr.shape[1] not in (4, 5):
        raise ValueError(f"frame {frame_idx}: boxes must be rows of 4 or 5 numbers")
    return detections_from_numpy(arr, [str(label) for label in labels])


class ReplayClock:
    """Clock driven by recorded frame timestamps."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now


def replay(
    config: Config,
    frames: List[Tuple[float, List[Detection]]],
    frame_width: int,
    frame_height: int,
) -> Dict[str, int]:
    """Run recorded frames through a fresh counting service and return its final counts."""
    clock = ReplayClock()
    service = CountingService(config, clock=clock)
    service.start_counting(frame_width, frame_height)

    for frame_idx, (timestamp, detections) in enumerate(frames):
        clock.now = timestamp
        result = service.process(detections)
        if result.new_crossings:
            logging.info(f"Frame {frame_idx}: crossings {result.new_crossings}")

    return service.get_crossing_stats()


def main():
    """Main application function."""
    parser = argparse.ArgumentParser(description='Tracking & line crossing replay')
    parser.add_argument('--config', type=str, default='config/config.yaml',
                        help='Path to configuration file')
    parser.add_argument('--input', type=str, required=True,
                        help='YAML file with recorded frames')
    parser.add_argument('--width', type=int, default=640,
                        help='Frame width in pixels')
    parser.add_argument('--height', type=int, default=480,
                        help='Frame height in pixels')
    parser.add_argument('--fps', type=float, default=30.0,
                        help='Frame rate for frames without a timestamp')
    args = parser.parse_args()

    config = load_config(args.config)

    is_valid, error_msg = validate_config(config)
    if not is_valid:
        logging.error(f"Configuration validation failed: {error_msg}")
        sys.exit(1)

    setup_logging(config['log_path'], config['log_level'])

    try:
        frames = load_frames(args.input, fps=args.fps)
    except (OSError, yaml.YAMLError, KeyError, TypeError, ValueError) as e:
        logging.error(f"Failed to load input frames from {args.input}: {e}")
        sys.exit(1)

    logging.info(f"Replaying {len(frames)} frames from {args.input}")
    stats = replay(Config.from_dict(config), frames, args.width, args.height)
    logging.info(
        "Final counts: " + ", ".join(f"{name}={count}" for name, count in stats.items())
    )


if __name__ == "__main__":
    main()
