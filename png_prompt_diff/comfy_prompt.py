"""
ComfyUI prompt fallback

ComfyUI stores its API-format graph as JSON in the "prompt" text chunk instead
of an A1111 "parameters" block. This module pulls the sampler settings and the
positive/negative CLIPTextEncode texts out of that graph so ComfyUI images can
be compared alongside A1111 ones.
"""

import json
import logging
from typing import Any, Dict, Optional

from .parameters import StableDiffusionParameters, parse_parameters

logger = logging.getLogger(__name__)

SAMPLER_CLASS_TYPES = ("KSampler", "KSamplerAdvanced")
TEXT_ENCODE_CLASS_TYPES = ("CLIPTextEncode", "CLIPTextEncodeSDXL", "CLIPTextEncodeFlux")
LATENT_CLASS_TYPES = ("EmptyLatentImage", "EmptySD3LatentImage", "EmptySDXLLatentImage")

# KSampler input -> params key, in display order
SAMPLER_PARAM_KEYS = {
    "steps": "Steps",
    "sampler_name": "Sampler",
    "scheduler": "Schedule type",
    "cfg": "CFG scale",
    "seed": "Seed",
    "noise_seed": "Seed",
    "denoise": "Denoising strength",
}


def _linked_node_id(ref: Any) -> Optional[str]:
    # links are serialized as [node_id, output_index]
    if isinstance(ref, list) and ref:
        return str(ref[0])
    return None


def _node_inputs(node: Dict[str, Any]) -> Dict[str, Any]:
    inputs = node.get("inputs")
    return inputs if isinstance(inputs, dict) else {}


def _node_text(node: Dict[str, Any]) -> str:
    inputs = _node_inputs(node)
    text = inputs.get("text")
    if text is None:
        text = inputs.get("text_g") or inputs.get("clip_l") or ""
    return text if isinstance(text, str) else ""


def summarize_comfy_prompt(prompt_text: str) -> Optional[StableDiffusionParameters]:
    """Extract prompts and sampler params from a ComfyUI "prompt" JSON string."""
    try:
        graph = json.loads(prompt_text)
    except (TypeError, ValueError) as e:
        logger.debug(f"ComfyUI prompt chunk is not valid JSON: {e}")
        return None
    if not isinstance(graph, dict):
        return None

    nodes = {str(nid): node for nid, node in graph.items() if isinstance(node, dict)}
    sampler = next(
        (node for node in nodes.values() if node.get("class_type") in SAMPLER_CLASS_TYPES),
        None,
    )
    if sampler is None:
        logger.debug("ComfyUI prompt has no sampler node")
        return None

    result = StableDiffusionParameters()
    sampler_inputs = _node_inputs(sampler)
    for input_name, label in SAMPLER_PARAM_KEYS.items():
        value = sampler_inputs.get(input_name)
        if value is not None and not isinstance(value, list):
            result.params[label] = str(value)

    positive = nodes.get(_linked_node_id(sampler_inputs.get("positive")))
    negative = nodes.get(_linked_node_id(sampler_inputs.get("negative")))
    if positive and positive.get("class_type") in TEXT_ENCODE_CLASS_TYPES:
        result.prompt = _node_text(positive)
    if negative and negative.get("class_type") in TEXT_ENCODE_CLASS_TYPES:
        result.negative_prompt = _node_text(negative)

    for node in nodes.values():
        ctype = node.get("class_type")
        inputs = _node_inputs(node)
        if ctype == "CheckpointLoaderSimple" and inputs.get("ckpt_name"):
            result.params.setdefault("Model", str(inputs["ckpt_name"]))
        elif ctype == "UNETLoader" and inputs.get("unet_name"):
            result.params.setdefault("Model", str(inputs["unet_name"]))
        elif ctype in LATENT_CLASS_TYPES:
            width, height = inputs.get("width"), inputs.get("height")
            if isinstance(width, int) and isinstance(height, int):
                result.params.setdefault("Size", f"{width}x{height}")

    return result


def parameters_from_metadata(metadata: Dict[str, str]) -> Optional[StableDiffusionParameters]:
    """Prefer the A1111 "parameters" chunk, fall back to a ComfyUI "prompt" graph."""
    parsed = parse_parameters(metadata.get("parameters"))
    if parsed is not None:
        return parsed
    prompt_chunk = metadata.get("prompt")
    if prompt_chunk:
        return summarize_comfy_prompt(prompt_chunk)
    return None
