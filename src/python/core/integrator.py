"""Taichi renderer for Phong-shaded sphere worlds.

This module evaluates the same per-ray pipeline as World.color_at, but inside
Taichi kernels over scene data uploaded to fields:

    camera ray -> nearest non-negative sphere root -> normal -> Phong lighting

Spheres are stored as structure-of-arrays fields holding each sphere's
inverse transform, its transpose and its material. Fields are single
precision, so results agree with the Python renderer to about 1e-4.

Pixels are shaded one after another (the pixel loop is serialized). Ties
between equal roots resolve to the first sphere in world order and to the
near root before the far one, as the Python hit() does after its stable sort.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.python.core.integrator import render_canvas
    >>> from src.python.scene.world import World
    >>>
    >>> canvas = render_canvas(camera, World.default())
    >>> canvas.to_ppm()
"""

import logging

import numpy as np
import taichi as ti
import taichi.math as tm

from src.python.camera.pinhole import Camera
from src.python.core.ray import Ray
from src.python.core.tuples import Tuple, color
from src.python.preview.canvas import Canvas
from src.python.scene.world import World

logger = logging.getLogger(__name__)

# Type aliases for Taichi vectors
vec3 = tm.vec3
vec4 = tm.vec4

# =============================================================================
# Rendering Constants
# =============================================================================

# Upper bound for the nearest-hit search
T_MAX = 1e30

# =============================================================================
# Scene Storage
# =============================================================================

# Maximum number of spheres supported in the scene
MAX_SPHERES = 1024

# Sphere storage: Structure of Arrays layout
_sphere_inverse = ti.Matrix.field(4, 4, dtype=ti.f32, shape=MAX_SPHERES)
_sphere_inverse_transpose = ti.Matrix.field(4, 4, dtype=ti.f32, shape=MAX_SPHERES)
_sphere_color = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
_sphere_ambient = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
_sphere_diffuse = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
_sphere_specular = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
_sphere_shininess = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
_sphere_count = ti.field(dtype=ti.i32, shape=())

# Point light
_light_enabled = ti.field(dtype=ti.i32, shape=())
_light_position = ti.Vector.field(3, dtype=ti.f32, shape=())
_light_intensity = ti.Vector.field(3, dtype=ti.f32, shape=())

# Set once a world has been uploaded
_scene_uploaded = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Remove all uploaded spheres and disable the light."""
    _sphere_count[None] = 0
    _light_enabled[None] = 0
    _scene_uploaded[None] = 0


def get_sphere_count() -> int:
    """Get the number of uploaded spheres."""
    return int(_sphere_count[None])


def is_light_enabled() -> bool:
    """Check if the uploaded world has a light."""
    return bool(_light_enabled[None])


def upload_world(world: World) -> None:
    """Copy a world's spheres and light into the Taichi fields.

    Args:
        world: The world to upload. Sphere order is preserved.

    Raises:
        RuntimeError: If the world has more than MAX_SPHERES spheres.
    """
    count = len(world.objects)
    if count > MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded: {count}")

    inverse = np.zeros((MAX_SPHERES, 4, 4), dtype=np.float32)
    inverse_transpose = np.zeros((MAX_SPHERES, 4, 4), dtype=np.float32)
    colors = np.zeros((MAX_SPHERES, 3), dtype=np.float32)
    # ambient, diffuse, specular, shininess
    coefficients = np.zeros((4, MAX_SPHERES), dtype=np.float32)

    for i, sphere in enumerate(world.objects):
        material = sphere.material
        inverse[i] = sphere.inverse_transform.to_numpy()
        inverse_transpose[i] = sphere.inverse_transpose.to_numpy()
        colors[i] = (material.color.red, material.color.green, material.color.blue)
        coefficients[:, i] = (
            material.ambient,
            material.diffuse,
            material.specular,
            material.shininess,
        )

    _sphere_inverse.from_numpy(inverse)
    _sphere_inverse_transpose.from_numpy(inverse_transpose)
    _sphere_color.from_numpy(colors)
    _sphere_ambient.from_numpy(coefficients[0])
    _sphere_diffuse.from_numpy(coefficients[1])
    _sphere_specular.from_numpy(coefficients[2])
    _sphere_shininess.from_numpy(coefficients[3])
    _sphere_count[None] = count

    if world.light is None:
        _light_enabled[None] = 0
    else:
        position = world.light.position
        intensity = world.light.intensity
        _light_position[None] = [position.x, position.y, position.z]
        _light_intensity[None] = [intensity.red, intensity.green, intensity.blue]
        _light_enabled[None] = 1

    _scene_uploaded[None] = 1
    logger.debug("Uploaded world: %d spheres, light=%s", count, world.light is not None)


def _check_renderable() -> None:
    """Raise if no world is uploaded or the uploaded world has no light."""
    if _scene_uploaded[None] == 0:
        raise RuntimeError("No world uploaded. Call upload_world() first.")
    if _light_enabled[None] == 0:
        raise RuntimeError("Cannot render a world without a light")


# =============================================================================
# Camera
# =============================================================================

_camera_inverse = ti.Matrix.field(4, 4, dtype=ti.f32, shape=())
_camera_half_width = ti.field(dtype=ti.f32, shape=())
_camera_half_height = ti.field(dtype=ti.f32, shape=())
_camera_pixel_size = ti.field(dtype=ti.f32, shape=())


def setup_camera(camera: Camera) -> None:
    """Copy a camera's canvas geometry and inverse transform into Taichi fields."""
    _camera_inverse[None] = ti.Matrix(camera.inverse_transform.to_nested_list())
    _camera_half_width[None] = camera.half_width
    _camera_half_height[None] = camera.half_height
    _camera_pixel_size[None] = camera.pixel_size


# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Color buffer indexed [x, y] with y = 0 at the top row
_color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))


def clear_render_target() -> None:
    """Clear the color buffer to zero."""
    _color_buffer.fill(0.0)


def reset() -> None:
    """Clear the uploaded scene and the color buffer."""
    clear_scene()
    clear_render_target()


# =============================================================================
# Shading Functions
# =============================================================================


@ti.func
def _reflect(incident: vec3, normal: vec3) -> vec3:
    return incident - normal * 2.0 * tm.dot(incident, normal)


@ti.func
def _transform_point(m, p: vec3) -> vec3:
    r = m @ vec4(p[0], p[1], p[2], 1.0)
    return vec3(r[0], r[1], r[2])


@ti.func
def _transform_vector(m, v: vec3) -> vec3:
    r = m @ vec4(v[0], v[1], v[2], 0.0)
    return vec3(r[0], r[1], r[2])


@ti.func
def _intersect_sphere(index: ti.i32, origin: vec3, direction: vec3):
    """Intersect a world-space ray with an uploaded unit sphere.

    Args:
        index: Sphere index.
        origin: Ray origin in world space.
        direction: Ray direction in world space.

    Returns:
        A tuple of (hit, t1, t2) with t1 <= t2 when hit == 1. Both roots are
        reported even when they lie behind the origin.
    """
    inv = _sphere_inverse[index]
    local_origin = _transform_point(inv, origin)
    local_direction = _transform_vector(inv, direction)

    a = tm.dot(local_direction, local_direction)
    b = 2.0 * tm.dot(local_direction, local_origin)
    c = tm.dot(local_origin, local_origin) - 1.0
    discriminant = b * b - 4.0 * a * c

    hit = 0
    t1 = 0.0
    t2 = 0.0
    if discriminant >= 0.0:
        sqrt_d = tm.sqrt(discriminant)
        t1 = (-b - sqrt_d) / (2.0 * a)
        t2 = (-b + sqrt_d) / (2.0 * a)
        hit = 1
    return hit, t1, t2


@ti.func
def _normal_at(index: ti.i32, world_point: vec3) -> vec3:
    """Unit world-space normal of an uploaded sphere at a surface point."""
    object_normal = _transform_point(_sphere_inverse[index], world_point)
    world_normal = _transform_vector(_sphere_inverse_transpose[index], object_normal)
    return tm.normalize(world_normal)


@ti.func
def _lighting(index: ti.i32, point: vec3, eyev: vec3, normalv: vec3) -> vec3:
    """Phong lighting of an uploaded sphere's material by the point light."""
    light_intensity = _light_intensity[None]
    effective_color = _sphere_color[index] * light_intensity
    lightv = tm.normalize(_light_position[None] - point)
    ambient = effective_color * _sphere_ambient[index]

    diffuse = vec3(0.0, 0.0, 0.0)
    specular = vec3(0.0, 0.0, 0.0)
    light_dot_normal = tm.dot(lightv, normalv)
    if light_dot_normal >= 0.0:
        diffuse = effective_color * _sphere_diffuse[index] * light_dot_normal
        reflectv = _reflect(-lightv, normalv)
        reflect_dot_eye = tm.dot(reflectv, eyev)
        if reflect_dot_eye > 0.0:
            factor = reflect_dot_eye ** _sphere_shininess[index]
            specular = light_intensity * _sphere_specular[index] * factor

    return ambient + diffuse + specular


@ti.func
def _color_at(origin: vec3, direction: vec3) -> vec3:
    """Color seen along a world-space ray.

    Picks the smallest non-negative root over all spheres. Equal roots keep
    the earliest candidate, scanning spheres in order and t1 before t2.
    """
    closest_t = T_MAX
    closest_index = -1
    for i in range(_sphere_count[None]):
        hit, t1, t2 = _intersect_sphere(i, origin, direction)
        if hit == 1:
            if t1 >= 0.0 and t1 < closest_t:
                closest_t = t1
                closest_index = i
            if t2 >= 0.0 and t2 < closest_t:
                closest_t = t2
                closest_index = i

    # Rays that hit nothing are black
    result = vec3(0.0, 0.0, 0.0)
    if closest_index >= 0:
        point = origin + direction * closest_t
        eyev = -direction
        normalv = _normal_at(closest_index, point)
        if tm.dot(normalv, eyev) < 0.0:
            normalv = -normalv
        result = _lighting(closest_index, point, eyev, normalv)
    return result


@ti.func
def _camera_ray(px: ti.i32, py: ti.i32):
    """World-space ray through the center of pixel (px, py)."""
    pixel_size = _camera_pixel_size[None]
    xoffset = (ti.cast(px, ti.f32) + 0.5) * pixel_size
    yoffset = (ti.cast(py, ti.f32) + 0.5) * pixel_size
    world_x = _camera_half_width[None] - xoffset
    world_y = _camera_half_height[None] - yoffset

    inv = _camera_inverse[None]
    pixel = _transform_point(inv, vec3(world_x, world_y, -1.0))
    origin = _transform_point(inv, vec3(0.0, 0.0, 0.0))
    return origin, tm.normalize(pixel - origin)


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_pixels(width: ti.i32, height: ti.i32):
    """Shade every pixel of the active region into the color buffer."""
    ti.loop_config(serialize=True)
    for y in range(height):
        for x in range(width):
            origin, direction = _camera_ray(x, y)
            _color_buffer[x, y] = _color_at(origin, direction)


@ti.kernel
def _trace_single(origin: vec3, direction: vec3) -> vec3:
    """Shade a single world-space ray."""
    return _color_at(origin, direction)


# =============================================================================
# Public API
# =============================================================================


def trace_ray(ray: Ray) -> Tuple:
    """Shade one ray against the uploaded world.

    Args:
        ray: A world-space ray.

    Returns:
        The color seen along the ray.

    Raises:
        RuntimeError: If no world is uploaded or it has no light.
    """
    _check_renderable()
    o = ray.origin
    d = ray.direction
    result = _trace_single(vec3(o.x, o.y, o.z), vec3(d.x, d.y, d.z))
    return color(float(result[0]), float(result[1]), float(result[2]))


def get_image(width: int, height: int) -> np.ndarray:
    """Read the active region of the color buffer as an (H, W, 3) array."""
    buffer = _color_buffer.to_numpy()[:width, :height]
    return np.transpose(buffer, (1, 0, 2)).astype(np.float64)


def render_canvas(camera: Camera, world: World) -> Canvas:
    """Render a world through a camera with the Taichi kernels.

    Args:
        camera: The camera to render through.
        world: The scene. Must have a light.

    Returns:
        The rendered canvas (unclamped colors).

    Raises:
        ValueError: If the camera canvas exceeds MAX_IMAGE_WIDTH x MAX_IMAGE_HEIGHT.
        RuntimeError: If the world has no light or too many spheres.
    """
    width, height = camera.hsize, camera.vsize
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )
    if world.light is None:
        raise RuntimeError("Cannot render a world without a light")

    upload_world(world)
    setup_camera(camera)
    _check_renderable()

    logger.debug("Rendering %dx%d with %d spheres", width, height, len(world.objects))
    _render_pixels(width, height)
    return Canvas.from_numpy(get_image(width, height))
