
import logging
from OpenGL.GL import *

logger = logging.getLogger(__name__)

# Vertex Shader
VS = r"""
#version 330 core
layout(location=0) in vec3 Position;
layout(location=1) in vec3 Normal;
layout(location=2) in vec2 TexCoord;

uniform mat4 MV;
uniform mat4 P;
uniform mat4 T;

out vec3 interpolatedNormal;
out vec3 lightDirection;
out vec2 st;

void main(){
    gl_Position = P * MV * vec4(Position, 1.0);
    interpolatedNormal = normalize(mat3(MV) * Normal);
    // light stays put in view space unless the mouse turns it
    lightDirection = normalize(mat3(T) * vec3(1.0, 1.0, 1.0));
    st = TexCoord;
}
"""

# Fragment Shader
FS = r"""
#version 330 core
in vec3 interpolatedNormal;
in vec3 lightDirection;
in vec2 st;

uniform float time;
uniform sampler2D tex;

out vec4 finalcolor;

void main(){
    vec3 n = normalize(interpolatedNormal);
    vec3 l = normalize(lightDirection);
    vec3 v = vec3(0.0, 0.0, 1.0);
    vec3 r = reflect(-l, n);

    float diffuse = max(dot(n, l), 0.0);
    float specular = pow(max(dot(r, v), 0.0), 16.0);

    vec3 albedo = texture(tex, st).rgb;
    float ambient = 0.2 + 0.05 * sin(time);
    vec3 color = albedo * (ambient + 0.8 * diffuse) + vec3(0.3) * specular;
    finalcolor = vec4(color, 1.0);
}
"""

UNIFORMS = ("MV", "P", "T", "time", "tex")


class ShaderProgram:
    def __init__(self, vs_src=VS, fs_src=FS):
        self.prog = glCreateProgram()
        vs = self._compile(vs_src, GL_VERTEX_SHADER)
        fs = self._compile(fs_src, GL_FRAGMENT_SHADER)
        glAttachShader(self.prog, vs); glAttachShader(self.prog, fs)
        glLinkProgram(self.prog)
        glDeleteShader(vs); glDeleteShader(fs)

        if not glGetProgramiv(self.prog, GL_LINK_STATUS):
            raise RuntimeError(glGetProgramInfoLog(self.prog).decode())

        # -1 is kept; GL ignores uploads to it
        self.locations = {}
        for name in UNIFORMS:
            loc = glGetUniformLocation(self.prog, name)
            if loc == -1:
                logger.warning("Unable to locate uniform %r in shader program", name)
            self.locations[name] = loc

    def _compile(self, src, kind):
        sh = glCreateShader(kind)
        glShaderSource(sh, src)
        glCompileShader(sh)
        if not glGetShaderiv(sh, GL_COMPILE_STATUS):
            raise RuntimeError(glGetShaderInfoLog(sh).decode())
        return sh

    def use(self):
        glUseProgram(self.prog)

    def set_matrix(self, name, matrix):
        # column-major already, no transpose
        glUniformMatrix4fv(self.locations[name], 1, GL_FALSE, matrix.data)

    def set_float(self, name, value):
        glUniform1f(self.locations[name], value)

    def set_texture_unit(self, unit=0):
        glActiveTexture(GL_TEXTURE0 + unit)
        glUniform1i(self.locations["tex"], unit)

    def destroy(self):
        glDeleteProgram(self.prog)
