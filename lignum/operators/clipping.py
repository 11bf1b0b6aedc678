# Lignum - A 2D Vector Drawing Engine
# Copyright (c) 2025-2026 Scott Bowman
# SPDX-License-Identifier: AGPL-3.0-or-later

from ..core import error as lg_error
from ..core import types as lt


def clip(ctxt, fill_rule: str = lt.FILL_RULE_NON_ZERO) -> None:
    """
    **clip**(fill_rule="nonzero")


    intersects the area inside the current clip region with the area inside
    the current path to produce a new, smaller clip region. The inside of the
    current path is determined by ``fill_rule``. The new clip keeps the
    transform in effect at this moment, so later transform changes do not
    move it. Intersection with earlier clips is carried out by the renderer,
    which receives the clip in emission order.

    **clip** consumes the current path. With an empty path the clip region
    and current point are left unchanged and nothing is emitted.

    The clip is part of the graphics state: **restore** brings back the clip
    that was in effect at the matching **save**.

    **See Also**:   **fill**, **save**, **restore**
    """
    lg_error.check_tag("fill_rule", fill_rule, lt.FILL_RULES)
    if ctxt.path.is_empty:
        return

    path = ctxt.path.consume()
    ctxt.gstate.clip = lt.ClipState(lt.Path(path), fill_rule, ctxt.gstate.transform,
                                    previous=ctxt.gstate.clip, serial=ctxt.clip_counter)
    ctxt.clip_counter += 1
    ctxt.display_list_builder.add_graphics_operation(
        lt.Clip(path, fill_rule, ctxt.gstate.copy()))
